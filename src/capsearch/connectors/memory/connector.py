"""In-memory connector — A backend held entirely in process memory.

Useful for tests, demos and small static data sets. Its capabilities are
supplied by the caller, and it behaves the way a remote backend with those
capabilities would:

  - Listing honours the paginator only when ``native_pagination`` is set,
    capped at ``max_page_size``; otherwise the whole set is returned.
  - When ``listing_returns_full_detail`` is false, listing yields summary
    records restricted to ``listed_attributes`` (and the name, if
    ``listing_includes_name``); ``fetch_by_id`` returns the full record.

Every backend call is recorded so callers can assert on the access pattern.

Usage::

    connector = MemoryConnector(
        records=[{"id": "1001", "name": "tcobb@test.com", "attributes": {"team": "Tigers"}}],
        capabilities=CapabilityDescriptor(listing_returns_full_detail=True),
    )
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from capsearch.connectors.base.connector import (
    BackendConnector,
    CapabilityDescriptor,
    ConnectorHealth,
    FilterOperator,
    ListingFilter,
)
from capsearch.connectors.base.exceptions import ConfigurationError
from capsearch.models.paging import Paginator
from capsearch.models.record import Record

logger = logging.getLogger(__name__)


class ListingCall(BaseModel):
    """One recorded ``list_records`` invocation."""

    listing_filter: ListingFilter | None = None
    page_size: int | None = None
    offset: int = 0
    returned: int = 0


class CallLog(BaseModel):
    """Backend calls seen by a ``MemoryConnector``."""

    listings: list[ListingCall] = Field(default_factory=list)
    fetch_by_id: list[str] = Field(default_factory=list)
    fetch_by_name: list[str] = Field(default_factory=list)

    @property
    def filtered_listings(self) -> list[ListingCall]:
        return [call for call in self.listings if call.listing_filter is not None]


def _matches(record: Record, listing_filter: ListingFilter) -> bool:
    for attribute, expected in listing_filter.criteria.items():
        actual = record.searchable_value(attribute)
        if actual is None:
            return False
        if listing_filter.operator is FilterOperator.EQUALS:
            if actual.lower() != expected.lower():
                return False
        elif expected.lower() not in actual.lower():
            return False
    return True


class MemoryConnector(BackendConnector):
    """Backend connector over an in-memory list of records.

    Args:
        records: Full-detail records, as ``Record`` instances or dicts.
        capabilities: Capabilities this connector should declare.
        name: Connector name reported to the registry.
    """

    def __init__(
        self,
        records: Iterable[Record | dict[str, Any]] = (),
        capabilities: CapabilityDescriptor | dict[str, Any] | None = None,
        name: str = "memory",
        **kwargs: Any,
    ) -> None:
        self._records: list[Record] = [r if isinstance(r, Record) else Record.model_validate(r) for r in records]
        if capabilities is None:
            capabilities = CapabilityDescriptor()
        elif isinstance(capabilities, dict):
            capabilities = CapabilityDescriptor.model_validate(capabilities)
        self._capabilities = capabilities
        self._name = name
        self._extra_kwargs = kwargs
        self._by_id: dict[str, Record] = {}
        for record in self._records:
            if record.id in self._by_id:
                raise ConfigurationError(f"Duplicate record id '{record.id}' in memory connector")
            self._by_id[record.id] = record
        self.calls = CallLog()

    @property
    def name(self) -> str:
        return self._name

    @property
    def capabilities(self) -> CapabilityDescriptor:
        return self._capabilities

    async def initialize(self) -> None:
        logger.info("Memory connector '%s' ready with %d records", self._name, len(self._records))

    async def shutdown(self) -> None:
        pass

    # ── Listing ──────────────────────────────────────────────────────────

    async def list_records(
        self,
        listing_filter: ListingFilter | None,
        paginator: Paginator,
        result_cap: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> list[Record]:
        records = self._records
        if listing_filter is not None and listing_filter.criteria:
            records = [r for r in records if _matches(r, listing_filter)]

        if self._capabilities.native_pagination:
            page_size = paginator.page_size
            if self._capabilities.has_page_maximum and (
                page_size is None or page_size > self._capabilities.max_page_size
            ):
                page_size = self._capabilities.max_page_size
            end = None if page_size is None else paginator.offset + page_size
            page = records[paginator.offset : end]
            paginator.no_more_results = paginator.offset + len(page) >= len(records)
        else:
            page = list(records)
            paginator.no_more_results = True
        paginator.total_results = len(records)

        if result_cap is not None:
            page = page[:result_cap]

        self.calls.listings.append(
            ListingCall(
                listing_filter=listing_filter,
                page_size=paginator.page_size,
                offset=paginator.offset,
                returned=len(page),
            )
        )
        if self._capabilities.listing_returns_full_detail:
            return page
        return [self._summarize(r) for r in page]

    def _summarize(self, record: Record) -> Record:
        listed = self._capabilities.listed_attributes
        return Record(
            id=record.id,
            name=record.name if self._capabilities.listing_includes_name else None,
            attributes={k: v for k, v in record.attributes.items() if k in listed},
            partial=True,
        )

    # ── Point lookups ────────────────────────────────────────────────────

    async def fetch_by_id(self, record_id: str, context: dict[str, Any] | None = None) -> Record | None:
        self.calls.fetch_by_id.append(record_id)
        return self._by_id.get(record_id)

    async def fetch_by_name(self, name: str, context: dict[str, Any] | None = None) -> Record | None:
        if not self._capabilities.supports_fetch_by_name:
            return await super().fetch_by_name(name, context)
        self.calls.fetch_by_name.append(name)
        wanted = name.lower()
        for record in self._records:
            if record.name is not None and record.name.lower() == wanted:
                return record
        return None

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> ConnectorHealth:
        return ConnectorHealth(
            status="healthy",
            last_check=datetime.now(UTC).isoformat(),
            message=f"{len(self._records)} records",
        )
