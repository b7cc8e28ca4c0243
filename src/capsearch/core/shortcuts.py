"""Single-record shortcuts — Point lookups by identifier or display name.

A shortcut bypasses the strategies entirely and emits at most one record.
Finding nothing is not an error.
"""

from __future__ import annotations

import logging

from capsearch.connectors.base.connector import BackendConnector, FilterOperator
from capsearch.core.bulk import BulkImportCoordinator, list_up_to_maximum
from capsearch.core.enrichment import ResultEmitter
from capsearch.core.exceptions import UnsupportedFilter
from capsearch.core.matching import first_match
from capsearch.models.predicate import NAME_ATTRIBUTE, AttributePredicate, Contains, Equals, Predicate

logger = logging.getLogger(__name__)


class ShortcutResolver:
    """Resolves identifier and display-name predicates without a strategy.

    Args:
        connector: Backend being searched.
        emitter: Enriches and dispatches to the search call's sink.
        importer: Used when a name scan must traverse the full record set.
    """

    def __init__(
        self,
        connector: BackendConnector,
        emitter: ResultEmitter,
        importer: BulkImportCoordinator,
    ) -> None:
        self._connector = connector
        self._emitter = emitter
        self._importer = importer

    async def resolve(self, predicate: Predicate | None) -> bool:
        """Try to answer ``predicate`` with a point lookup.

        Returns:
            True if the search was handled here, False to fall through.

        Raises:
            UnsupportedFilter: For name equality on a backend that neither
                lists names nor looks records up by name.
        """
        if not isinstance(predicate, AttributePredicate):
            return False

        if isinstance(predicate, Equals) and predicate.targets_id:
            await self._by_id(predicate.value_as_string)
            return True

        if not predicate.targets_name:
            return False

        capabilities = self._connector.capabilities
        if isinstance(predicate, Equals):
            if capabilities.supports_fetch_by_name:
                await self._by_name(predicate.value_as_string)
            elif capabilities.listing_includes_name:
                await self._scan_for_name(predicate)
            else:
                raise UnsupportedFilter(NAME_ATTRIBUTE, FilterOperator.EQUALS.value)
            return True

        if (
            isinstance(predicate, Contains)
            and capabilities.supports_fetch_by_name
            and not capabilities.listing_includes_name
        ):
            await self._by_name(predicate.value_as_string)
            return True

        return False

    async def _by_id(self, record_id: str) -> None:
        context = await self._connector.prefetch_context()
        record = await self._connector.fetch_by_id(record_id, context)
        if record is None:
            logger.debug("No record with id '%s' on '%s'", record_id, self._connector.name)
            return
        await self._emitter.dispatch([record])

    async def _by_name(self, name: str) -> None:
        context = await self._connector.prefetch_context()
        record = await self._connector.fetch_by_name(name, context)
        if record is None:
            logger.debug("No record named '%s' on '%s'", name, self._connector.name)
            return
        await self._emitter.dispatch([record])

    async def _scan_for_name(self, predicate: Equals) -> None:
        context = await self._connector.prefetch_context()
        if self._connector.capabilities.filtering_requires_full_import:
            candidates = await self._importer.collect_all()
        else:
            candidates = await list_up_to_maximum(self._connector, context)
        match = first_match(candidates, predicate)
        if match is None:
            logger.debug("No listed record named '%s' on '%s'", predicate.value_as_string, self._connector.name)
            return
        await self._emitter.emit([match], context)
