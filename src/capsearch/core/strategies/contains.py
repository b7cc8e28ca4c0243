"""Contains strategy — Case-insensitive substring matching.

Decision tree:
  - Attribute missing from listing output:
      native substring filter → native fetch
      native equality filter only → native fetch with equality
      (returns only exact matches, possibly fewer than a substring search)
      identifier, or name when listed → full local scan
      otherwise → UnsupportedFilter
  - Attribute present in listing output:
      native substring filter → native fetch
      otherwise → local scan (complete import when the backend requires it)
"""

from __future__ import annotations

import logging

from capsearch.connectors.base.connector import FilterOperator, ListingFilter
from capsearch.core.exceptions import UnsupportedFilter
from capsearch.core.matching import filter_records
from capsearch.core.strategies.base import SearchStrategy
from capsearch.models.paging import PagingRequest
from capsearch.models.predicate import Contains
from capsearch.models.result import SearchResult

logger = logging.getLogger(__name__)


class ContainsStrategy(SearchStrategy):
    """Executes a ``Contains`` predicate."""

    async def execute(self, predicate: Contains, paging: PagingRequest | None) -> SearchResult:
        attribute = predicate.attribute
        value = predicate.value_as_string
        capabilities = self.capabilities

        if capabilities.supports_native_filter(attribute, FilterOperator.CONTAINS):
            return await self.native.fetch(ListingFilter.single(attribute, value, FilterOperator.CONTAINS), paging)

        if not capabilities.is_enumerable(attribute):
            if capabilities.supports_native_filter(attribute, FilterOperator.EQUALS):
                logger.debug("Approximating substring match on '%s' with a native equality filter", attribute)
                return await self.native.fetch(ListingFilter.single(attribute, value, FilterOperator.EQUALS), paging)
            if not self.is_locally_matchable(attribute):
                raise UnsupportedFilter(attribute, "contains")

        return await self._manual(predicate, paging)

    async def _manual(self, predicate: Contains, paging: PagingRequest | None) -> SearchResult:
        context = await self.connector.prefetch_context()
        matches = filter_records(await self.full_candidates(context), predicate)
        logger.debug("Manual contains on '%s': %d matches", predicate.attribute, len(matches))
        return await self.emit_window(matches, paging, context)
