"""Search Engine — Capability-aware dispatcher for backend searches.

The engine manages one search call end to end:
  1. Validation: Reject predicate shapes it cannot execute
  2. Shortcuts: Answer identifier/name lookups with a single fetch
  3. Routing: Pick the pagination-only path, the bulk import, or the
     Equals / Contains / And strategy
  4. Emission: Enrich summaries and hand batches to the result sink

Every decision is driven by the connector's ``CapabilityDescriptor``. The
engine holds no per-search state; each call builds its own paginator,
emitter and strategy objects.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING

from capsearch.core.bulk import BulkImportCoordinator, PaginationOnlyPath
from capsearch.core.enrichment import ResultEmitter, ResultSink
from capsearch.core.exceptions import UnsupportedPredicate
from capsearch.core.shortcuts import ShortcutResolver
from capsearch.core.strategies import AndStrategy, ContainsStrategy, EqualsStrategy
from capsearch.core.validator import validate_predicate
from capsearch.models.paging import PagingRequest
from capsearch.models.predicate import And, Contains, Equals, Predicate
from capsearch.models.result import SearchResult
from capsearch.observability.logging import search_context

if TYPE_CHECKING:
    from capsearch.config.settings import SearchSettings
    from capsearch.connectors.base.connector import BackendConnector

logger = logging.getLogger(__name__)


class SearchEngine:
    """Runs searches against one backend connector.

    Attributes:
        connector: The backend being searched.
        settings: Search behavior configuration (batch and page sizes).

    Example:
        >>> engine = SearchEngine(connector)
        >>> result = await engine.search(Contains(attribute="email", value="test"), sink.append)
    """

    def __init__(self, connector: BackendConnector, settings: SearchSettings | None = None) -> None:
        if settings is None:
            from capsearch.config.settings import SearchSettings

            settings = SearchSettings()
        self.connector = connector
        self.settings = settings

    async def search(
        self,
        predicate: Predicate | None,
        sink: ResultSink,
        paging: PagingRequest | None = None,
    ) -> SearchResult:
        """Execute one search and stream its records to ``sink``.

        Args:
            predicate: Search condition, or None to match every record.
            sink: Receives ordered, non-empty batches of full-detail records.
                May be a plain callable or a coroutine function.
            paging: Caller's page window (1-based offset), if any.

        Returns:
            Continuation state: a token and whether another page exists.

        Raises:
            UnsupportedPredicate: If the predicate shape is not executable.
            EmptyAndPredicate: If an And predicate has no sub-predicates.
            InvalidPredicateValue: If a predicate value is blank.
            UnsupportedFilter: If the backend cannot search the attribute.
        """
        start_time = time.monotonic()
        validate_predicate(predicate)

        search_id = f"srch_{uuid.uuid4().hex[:12]}"
        emitter = ResultEmitter(self.connector, sink)
        importer = BulkImportCoordinator(self.connector, self.settings.import_batch_size)

        with search_context(connector=self.connector.name, search_id=search_id):
            logger.info(
                "Search on '%s': predicate=%s paging=%s",
                self.connector.name,
                _describe(predicate),
                _describe_paging(paging),
            )

            result = await self._dispatch(predicate, paging, emitter, importer)

            elapsed_ms = int((time.monotonic() - start_time) * 1000)
            logger.info(
                "Search on '%s' emitted %d records in %d batches (%dms, done=%s)",
                self.connector.name,
                emitter.emitted,
                emitter.batches,
                elapsed_ms,
                result.no_more_results,
            )
        return result

    async def _dispatch(
        self,
        predicate: Predicate | None,
        paging: PagingRequest | None,
        emitter: ResultEmitter,
        importer: BulkImportCoordinator,
    ) -> SearchResult:
        shortcuts = ShortcutResolver(self.connector, emitter, importer)
        if await shortcuts.resolve(predicate):
            return SearchResult()

        if predicate is None:
            if paging is not None and paging.is_usable:
                return await PaginationOnlyPath(self.connector, emitter).serve(paging)
            return await importer.import_all(emitter)

        strategy_args = (self.connector, emitter, importer, self.settings.default_filter_page_size)
        if isinstance(predicate, Equals):
            return await EqualsStrategy(*strategy_args).execute(predicate, paging)
        if isinstance(predicate, Contains):
            return await ContainsStrategy(*strategy_args).execute(predicate, paging)
        if isinstance(predicate, And):
            return await AndStrategy(*strategy_args).execute(predicate, paging)

        raise UnsupportedPredicate(f"Unsupported predicate type: {predicate.kind}")


def _describe(predicate: Predicate | None) -> str:
    if predicate is None:
        return "all"
    if isinstance(predicate, And):
        return "and(" + ",".join(_describe(p) for p in predicate.predicates) + ")"
    if isinstance(predicate, (Equals, Contains)):
        return f"{predicate.kind.lower()}({predicate.attribute}:{predicate.value_as_string})"
    return predicate.kind


def _describe_paging(paging: PagingRequest | None) -> str:
    if paging is None:
        return "none"
    return f"[size:{paging.page_size},offset:{paging.offset}]"
