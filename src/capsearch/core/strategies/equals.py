"""Equals strategy — Exact, case-insensitive attribute matching.

Decision tree:
  - Attribute missing from listing output:
      native equality filter → native fetch
      native substring filter only → native fetch with substring matching
      (may return a superset of the exact matches)
      otherwise → UnsupportedFilter
  - Attribute present in listing output:
      any native filter → native fetch with equality
      otherwise → bounded listing, local exact match, local window
"""

from __future__ import annotations

import logging

from capsearch.connectors.base.connector import FilterOperator, ListingFilter
from capsearch.core.exceptions import UnsupportedFilter
from capsearch.core.matching import filter_records
from capsearch.core.strategies.base import SearchStrategy
from capsearch.models.paging import PagingRequest
from capsearch.models.predicate import Equals
from capsearch.models.result import SearchResult

logger = logging.getLogger(__name__)


class EqualsStrategy(SearchStrategy):
    """Executes an ``Equals`` predicate on a regular attribute."""

    async def execute(self, predicate: Equals, paging: PagingRequest | None) -> SearchResult:
        attribute = predicate.attribute
        value = predicate.value_as_string
        capabilities = self.capabilities

        if not capabilities.is_enumerable(attribute):
            if capabilities.supports_native_filter(attribute, FilterOperator.EQUALS):
                return await self.native.fetch(ListingFilter.single(attribute, value, FilterOperator.EQUALS), paging)
            if capabilities.supports_native_filter(attribute, FilterOperator.CONTAINS):
                logger.debug("Approximating equality on '%s' with a native substring filter", attribute)
                return await self.native.fetch(ListingFilter.single(attribute, value, FilterOperator.CONTAINS), paging)
            raise UnsupportedFilter(attribute, "equals")

        if capabilities.supports_any_native_filter(attribute):
            return await self.native.fetch(ListingFilter.single(attribute, value, FilterOperator.EQUALS), paging)

        return await self._manual(predicate, paging)

    async def _manual(self, predicate: Equals, paging: PagingRequest | None) -> SearchResult:
        context = await self.connector.prefetch_context()
        matches = filter_records(await self.candidates(context), predicate)
        logger.debug("Manual equals on '%s': %d matches", predicate.attribute, len(matches))
        return await self.emit_window(matches, paging, context)
