"""Shared plumbing for the predicate strategies."""

from __future__ import annotations

from typing import Any

from capsearch.connectors.base.connector import BackendConnector, CapabilityDescriptor
from capsearch.core.bulk import BulkImportCoordinator, list_up_to_maximum
from capsearch.core.enrichment import ResultEmitter
from capsearch.core.matching import slice_page
from capsearch.core.strategies.native import NativeFilterFetch
from capsearch.models.paging import Paginator, PagingRequest
from capsearch.models.predicate import ID_ATTRIBUTE, NAME_ATTRIBUTE
from capsearch.models.record import Record
from capsearch.models.result import SearchResult


class SearchStrategy:
    """Base class holding what every strategy needs for one search call.

    Attributes:
        connector: Backend being searched.
        emitter: Enriches and dispatches batches to this call's sink.
        importer: Bulk-import coordinator, used to collect full record sets.
        native: Native-filtered fetch helper.
        default_page_size: Window used when the caller gives no page size.
    """

    def __init__(
        self,
        connector: BackendConnector,
        emitter: ResultEmitter,
        importer: BulkImportCoordinator,
        default_page_size: int,
    ) -> None:
        self.connector = connector
        self.emitter = emitter
        self.importer = importer
        self.default_page_size = default_page_size
        self.native = NativeFilterFetch(connector, emitter, default_page_size)

    @property
    def capabilities(self) -> CapabilityDescriptor:
        return self.connector.capabilities

    def page_paginator(self, paging: PagingRequest | None) -> Paginator:
        return Paginator.for_request_or_default(paging, self.default_page_size)

    def is_locally_matchable(self, attribute: str) -> bool:
        """True if listing output carries ``attribute`` for manual matching."""
        if self.capabilities.is_enumerable(attribute) or attribute == ID_ATTRIBUTE:
            return True
        return attribute == NAME_ATTRIBUTE and self.capabilities.listing_includes_name

    async def candidates(self, context: dict[str, Any]) -> list[Record]:
        """Records for manual filtering: one bounded listing call."""
        return await list_up_to_maximum(self.connector, context)

    async def full_candidates(self, context: dict[str, Any]) -> list[Record]:
        """Like ``candidates``, but traverses everything when the backend requires it."""
        if self.capabilities.filtering_requires_full_import:
            return await self.importer.collect_all()
        return await self.candidates(context)

    async def emit_window(
        self, matches: list[Record], paging: PagingRequest | None, context: dict[str, Any]
    ) -> SearchResult:
        """Emit the caller's window of locally filtered ``matches``. No token is issued."""
        paginator = self.page_paginator(paging)
        await self.emitter.emit(slice_page(matches, paginator), context)
        return SearchResult(no_more_results=paginator.no_more_results)
