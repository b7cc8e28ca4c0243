"""Pagination-only path and bulk-import coordinator.

Both serve searches without a predicate:
  - ``PaginationOnlyPath`` answers a single page request.
  - ``BulkImportCoordinator`` traverses the whole record set in batches,
    either emitting each batch or collecting everything for manual
    filtering.

``list_up_to_maximum`` is the plain listing used by the manual filtering
paths: one call bounded by the backend's declared page maximum.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

from capsearch.connectors.base.connector import BackendConnector
from capsearch.core.enrichment import ResultEmitter
from capsearch.core.matching import slice_page
from capsearch.models.paging import Paginator, PagingRequest
from capsearch.models.record import Record
from capsearch.models.result import SearchResult

logger = logging.getLogger(__name__)


def maximum_page_paginator(connector: BackendConnector) -> Paginator:
    """A paginator asking for the backend's largest page, or everything."""
    capabilities = connector.capabilities
    if capabilities.has_page_maximum:
        return Paginator(page_size=capabilities.max_page_size)
    return Paginator.unbounded()


async def list_up_to_maximum(connector: BackendConnector, context: dict[str, Any] | None = None) -> list[Record]:
    """Run one unfiltered listing call bounded by the backend's page maximum."""
    paginator = maximum_page_paginator(connector)
    records = await connector.list_records(None, paginator, context=context)
    if not paginator.no_more_results and connector.capabilities.has_page_maximum:
        logger.warning(
            "Listing on '%s' truncated at %d records; manual filtering sees a partial set",
            connector.name,
            len(records),
        )
    return records


class PaginationOnlyPath:
    """Serves one page of the unfiltered record set."""

    def __init__(self, connector: BackendConnector, emitter: ResultEmitter) -> None:
        self._connector = connector
        self._emitter = emitter

    async def serve(self, paging: PagingRequest) -> SearchResult:
        """Emit the requested page.

        Args:
            paging: A usable paging request.

        Returns:
            The continuation state after this page.
        """
        paginator = Paginator.from_paging_request(paging)
        context = await self._connector.prefetch_context()
        records = await self._connector.list_records(None, paginator, context=context)

        if self._connector.capabilities.native_pagination:
            await self._emitter.emit(records, context)
            return SearchResult.from_paginator(paginator)

        total = len(records)
        if total <= paginator.page_size:
            page = records
            paginator.no_more_results = True
        elif paginator.offset >= total:
            page = []
            paginator.no_more_results = True
        else:
            page = slice_page(records, paginator)
        logger.debug("Manual page %s over %d records yields %d", paginator, total, len(page))

        await self._emitter.emit(page, context)
        return SearchResult(no_more_results=paginator.no_more_results)


class BulkImportCoordinator:
    """Traverses the complete record set in batches of ``batch_size``.

    With native pagination, one listing call is issued per batch; otherwise
    a single unbounded listing is split locally.
    """

    def __init__(self, connector: BackendConnector, batch_size: int) -> None:
        self._connector = connector
        capabilities = connector.capabilities
        if capabilities.has_page_maximum:
            batch_size = min(batch_size, capabilities.max_page_size)
        self.batch_size = batch_size

    async def import_all(self, emitter: ResultEmitter) -> SearchResult:
        """Emit every record, one enriched batch at a time."""
        pages = 0
        async for batch, context in self._batches():
            await emitter.emit(batch, context)
            pages += 1
        logger.info(
            "Imported %d records from '%s' in %d pages", emitter.emitted, self._connector.name, pages
        )
        return SearchResult()

    async def collect_all(self) -> list[Record]:
        """Return every listed record, unenriched, as one list."""
        collected: list[Record] = []
        async for batch, _ in self._batches():
            collected.extend(batch)
        logger.debug("Collected %d records from '%s'", len(collected), self._connector.name)
        return collected

    async def _batches(self) -> AsyncIterator[tuple[list[Record], dict[str, Any]]]:
        if self._connector.capabilities.native_pagination:
            async for item in self._native_batches():
                yield item
        else:
            async for item in self._local_batches():
                yield item

    async def _native_batches(self) -> AsyncIterator[tuple[list[Record], dict[str, Any]]]:
        offset = 0
        while True:
            context = await self._connector.prefetch_context()
            paginator = Paginator(page_size=self.batch_size, offset=offset)
            records = await self._connector.list_records(None, paginator, context=context)
            if records:
                yield records, context
            offset += len(records)
            if paginator.no_more_results or len(records) < self.batch_size:
                return

    async def _local_batches(self) -> AsyncIterator[tuple[list[Record], dict[str, Any]]]:
        context = await self._connector.prefetch_context()
        records = await self._connector.list_records(None, Paginator.unbounded(), context=context)
        for start in range(0, len(records), self.batch_size):
            batch = records[start : start + self.batch_size]
            yield batch, context
            if len(batch) < self.batch_size:
                return
