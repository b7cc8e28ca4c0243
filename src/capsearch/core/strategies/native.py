"""Native-filtered fetch — One listing call carrying a backend-side filter."""

from __future__ import annotations

import logging

from capsearch.connectors.base.connector import BackendConnector, ListingFilter
from capsearch.core.enrichment import ResultEmitter
from capsearch.core.matching import slice_page
from capsearch.models.paging import Paginator, PagingRequest
from capsearch.models.result import SearchResult

logger = logging.getLogger(__name__)


class NativeFilterFetch:
    """Issues a single filtered listing call and emits the resulting page.

    The page window comes from the caller's paging request, or the default
    filter page size. Backends without native pagination return everything
    that matches, and the window is cut out locally.
    """

    def __init__(self, connector: BackendConnector, emitter: ResultEmitter, default_page_size: int) -> None:
        self._connector = connector
        self._emitter = emitter
        self._default_page_size = default_page_size

    async def fetch(self, listing_filter: ListingFilter, paging: PagingRequest | None) -> SearchResult:
        """Run the filtered listing call and emit its page.

        Args:
            listing_filter: Filter the backend applies natively.
            paging: Caller's paging request, if any.

        Returns:
            The paginator's continuation state after the call.
        """
        context = await self._connector.prefetch_context()
        paginator = Paginator.for_request_or_default(paging, self._default_page_size)
        logger.debug("Native filter %s on '%s' with paginator %s", listing_filter, self._connector.name, paginator)

        records = await self._connector.list_records(listing_filter, paginator, context=context)
        if not self._connector.capabilities.native_pagination:
            records = slice_page(records, paginator)

        await self._emitter.emit(records, context)
        return SearchResult.from_paginator(paginator)
