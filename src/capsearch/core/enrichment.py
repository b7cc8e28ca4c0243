"""Result enrichment & dispatch — The convergence point of every search path.

When a backend's listing returns summaries, each record is re-fetched by
identifier before the batch reaches the sink. The summary is placed in the
prefetch context under ``PARTIAL_RECORD_KEY`` first, so connectors can reuse
what the listing already returned.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from capsearch.connectors.base.connector import BackendConnector
from capsearch.models.record import Record

logger = logging.getLogger(__name__)

PARTIAL_RECORD_KEY = "partial_record"

ResultSink = Callable[[list[Record]], Awaitable[None] | None]


class ResultEmitter:
    """Enriches candidate batches and hands them to one search's sink.

    Attributes:
        emitted: Number of records handed to the sink so far.
        batches: Number of batches handed to the sink so far.
    """

    def __init__(self, connector: BackendConnector, sink: ResultSink) -> None:
        self._connector = connector
        self._sink = sink
        self.emitted = 0
        self.batches = 0

    async def enrich(self, records: list[Record], context: dict[str, Any] | None = None) -> list[Record]:
        """Replace summaries with full-detail records, preserving order.

        Records whose follow-up fetch finds nothing are dropped.
        """
        if self._connector.capabilities.listing_returns_full_detail:
            return records

        if context is None:
            context = {}
        enriched: list[Record] = []
        for record in records:
            context[PARTIAL_RECORD_KEY] = record
            full = await self._connector.fetch_by_id(record.id, context)
            if full is None:
                logger.warning("Record '%s' disappeared before enrichment, skipping", record.id)
                continue
            enriched.append(full)
        context.pop(PARTIAL_RECORD_KEY, None)
        return enriched

    async def dispatch(self, records: list[Record]) -> None:
        """Hand an already complete batch to the sink. Empty batches are skipped."""
        if not records:
            return
        result = self._sink(records)
        if inspect.isawaitable(result):
            await result
        self.emitted += len(records)
        self.batches += 1

    async def emit(self, records: list[Record], context: dict[str, Any] | None = None) -> None:
        """Enrich ``records`` if needed, then dispatch them."""
        await self.dispatch(await self.enrich(records, context))
