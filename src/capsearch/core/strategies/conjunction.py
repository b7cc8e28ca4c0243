"""And strategy — Conjunction of two Equals/Contains sub-predicates.

Routing looks at the first sub-predicate only. If the backend can filter
its attribute natively (by either operator), a single combined listing call
carries every attribute/value pair. The second attribute's capability is
not checked on that path.

Otherwise every sub-predicate attribute must be present in listing output,
and each is matched locally against one bounded listing. The caller's
window is applied to each candidate set before the sets are intersected,
so a page can hold fewer records than a window over the intersection would.
"""

from __future__ import annotations

import logging

from capsearch.connectors.base.connector import ListingFilter
from capsearch.core.exceptions import UnsupportedFilter
from capsearch.core.matching import filter_records, intersect, operator_of, other_operator, window, window_exhausts
from capsearch.core.strategies.base import SearchStrategy
from capsearch.models.paging import Paginator, PagingRequest
from capsearch.models.predicate import And, AttributePredicate
from capsearch.models.result import SearchResult

logger = logging.getLogger(__name__)


class AndStrategy(SearchStrategy):
    """Executes a validated two-way ``And`` predicate."""

    async def execute(self, predicate: And, paging: PagingRequest | None) -> SearchResult:
        children: list[AttributePredicate] = list(predicate.predicates)  # type: ignore[arg-type]
        first = children[0]

        if self.capabilities.supports_any_native_filter(first.attribute):
            operator = operator_of(first)
            if not self.capabilities.supports_native_filter(first.attribute, operator):
                operator = other_operator(operator)
            listing_filter = ListingFilter(
                criteria={child.attribute: child.value_as_string for child in children},
                operator=operator,
            )
            return await self.native.fetch(listing_filter, paging)

        for child in children:
            if not self.capabilities.is_enumerable(child.attribute):
                raise UnsupportedFilter(child.attribute, "and")

        return await self._manual(children, paging)

    async def _manual(self, children: list[AttributePredicate], paging: PagingRequest | None) -> SearchResult:
        context = await self.connector.prefetch_context()
        candidates = await self.candidates(context)
        if paging is not None and paging.is_usable:
            paginator = Paginator.from_paging_request(paging)
        else:
            paginator = Paginator.unbounded()

        candidate_sets = []
        exhausted = True
        for child in children:
            matches = filter_records(candidates, child)
            candidate_sets.append(window(matches, paginator))
            exhausted = exhausted and window_exhausts(len(matches), paginator)

        result = intersect(candidate_sets)
        logger.debug(
            "Manual and over %d candidates: sets %s intersect to %d",
            len(candidates),
            [len(s) for s in candidate_sets],
            len(result),
        )
        await self.emitter.emit(result, context)
        return SearchResult(no_more_results=exhausted)
