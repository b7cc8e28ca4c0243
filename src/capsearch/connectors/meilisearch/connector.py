"""MeiliSearch connector — Records stored as documents in a MeiliSearch index.

Communicates via the REST API using ``httpx``. Listing uses the documents
endpoint, which pages natively with ``offset``/``limit`` and accepts a
filter expression on attributes declared filterable in the index settings.

Capabilities:
  - Native pagination, at most ``max_page_size`` documents per call
  - Listing returns complete documents (no follow-up fetch)
  - Native equality filtering on the configured filterable attributes
  - Lookup by name when the name field is filterable

Usage::

    connector = MeiliSearchConnector(
        base_url="http://localhost:7700",
        index="accounts",
        api_key="your-master-key",
        filterable_attributes=["team", "email"],
    )
    await connector.initialize()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any
from urllib.parse import quote

import httpx

from capsearch.connectors.base.connector import (
    BackendConnector,
    CapabilityDescriptor,
    ConnectorHealth,
    FilterCapability,
    FilterOperator,
    ListingFilter,
)
from capsearch.connectors.base.exceptions import ConnectionError, QueryError
from capsearch.models.paging import Paginator
from capsearch.models.record import Record

logger = logging.getLogger(__name__)

MEILI_MAX_PAGE_SIZE = 1000


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class MeiliSearchConnector(BackendConnector):
    """Backend connector for a MeiliSearch index.

    Args:
        base_url: MeiliSearch instance URL, e.g. ``"http://localhost:7700"``.
        index: Index UID holding the records.
        api_key: Master key or API key for authentication.
        primary_key: Document field used as the record identifier.
        name_field: Document field used as the record display name.
        filterable_attributes: Fields declared filterable in the index.
        max_page_size: Largest ``limit`` sent in one listing call.
        timeout: HTTP request timeout in seconds.
        **kwargs: Extra keyword arguments stored for future use.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:7700",
        index: str = "records",
        api_key: str | None = None,
        primary_key: str = "id",
        name_field: str = "name",
        filterable_attributes: Iterable[str] = (),
        max_page_size: int = MEILI_MAX_PAGE_SIZE,
        timeout: float = 30.0,
        **kwargs: Any,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._index = index
        self._api_key = api_key
        self._primary_key = primary_key
        self._name_field = name_field
        self._filterable = frozenset(filterable_attributes)
        self._timeout = timeout
        self._extra_kwargs = kwargs
        self._client: httpx.AsyncClient | None = None
        self._capabilities = CapabilityDescriptor(
            native_pagination=True,
            max_page_size=max_page_size,
            listing_returns_full_detail=True,
            listing_includes_name=True,
            supports_fetch_by_name=name_field in self._filterable,
            filters=FilterCapability(
                equality_attributes=self._filterable - {primary_key, name_field},
                substring_attributes=frozenset(),
            ),
        )

    @property
    def name(self) -> str:
        return "meilisearch"

    @property
    def capabilities(self) -> CapabilityDescriptor:
        return self._capabilities

    async def initialize(self) -> None:
        """Create an ``httpx.AsyncClient`` and verify connection to MeiliSearch."""
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers=headers,
        )

        try:
            resp = await self._client.get("/health")
            resp.raise_for_status()
            data = resp.json()
            if data.get("status") != "available":
                raise ConnectionError(f"MeiliSearch not available: {data}")
            logger.info(
                "Connected to MeiliSearch at %s (index: %s)",
                self._base_url,
                self._index,
            )
        except httpx.HTTPError as e:
            raise ConnectionError(f"Failed to connect to MeiliSearch: {e}") from e

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Listing ──────────────────────────────────────────────────────────

    async def list_records(
        self,
        listing_filter: ListingFilter | None,
        paginator: Paginator,
        result_cap: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> list[Record]:
        """List documents via ``POST /indexes/{index}/documents/fetch``."""
        client = self._require_client()

        limit = self._capabilities.max_page_size
        if paginator.page_size is not None:
            limit = min(limit, paginator.page_size)
        if result_cap is not None:
            limit = min(limit, result_cap)

        payload: dict[str, Any] = {"offset": paginator.offset, "limit": limit}
        if listing_filter is not None and listing_filter.criteria:
            payload["filter"] = self._filter_expression(listing_filter)

        try:
            resp = await client.post(f"/indexes/{self._index}/documents/fetch", json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise QueryError(f"MeiliSearch document listing failed: {e}") from e

        data = resp.json()
        results = data.get("results", [])
        total = data.get("total", paginator.offset + len(results))
        paginator.total_results = total
        paginator.no_more_results = paginator.offset + len(results) >= total
        return [self._to_record(doc) for doc in results]

    def _filter_expression(self, listing_filter: ListingFilter) -> str:
        if listing_filter.operator is not FilterOperator.EQUALS:
            raise QueryError(f"MeiliSearch connector cannot filter with '{listing_filter.operator.value}'")
        return " AND ".join(f"{attr} = {_quote(value)}" for attr, value in listing_filter.criteria.items())

    # ── Point lookups ────────────────────────────────────────────────────

    async def fetch_by_id(self, record_id: str, context: dict[str, Any] | None = None) -> Record | None:
        """Retrieve a single document by its primary key."""
        client = self._require_client()
        try:
            resp = await client.get(f"/indexes/{self._index}/documents/{quote(record_id, safe='')}")
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise QueryError(f"Failed to fetch document from MeiliSearch: {e}") from e
        return self._to_record(resp.json())

    async def fetch_by_name(self, name: str, context: dict[str, Any] | None = None) -> Record | None:
        """Retrieve a document whose name field equals ``name``."""
        if not self._capabilities.supports_fetch_by_name:
            return await super().fetch_by_name(name, context)
        paginator = Paginator(page_size=1)
        listing_filter = ListingFilter.single(self._name_field, name, FilterOperator.EQUALS)
        records = await self.list_records(listing_filter, paginator)
        return records[0] if records else None

    # ── Schema mapping ───────────────────────────────────────────────────

    def _to_record(self, doc: dict[str, Any]) -> Record:
        """Map a MeiliSearch document to a ``Record``."""
        attributes = {k: v for k, v in doc.items() if k not in (self._primary_key, self._name_field)}
        name = doc.get(self._name_field)
        return Record(
            id=str(doc.get(self._primary_key, "")),
            name=str(name) if name is not None else None,
            attributes=attributes,
        )

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise ConnectionError("MeiliSearch client not initialized.")
        return self._client

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> ConnectorHealth:
        """Check MeiliSearch health."""
        if not self._client:
            return ConnectorHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            resp = await self._client.get("/health")
            latency_ms = int((time.monotonic() - start) * 1000)

            if resp.status_code == 200:
                data = resp.json()
                status = data.get("status", "unknown")
                return ConnectorHealth(
                    status="healthy" if status == "available" else "degraded",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message=f"Index: {self._index}, status: {status}",
                )
            return ConnectorHealth(
                status="degraded",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"MeiliSearch returned HTTP {resp.status_code}",
            )
        except Exception as e:
            return ConnectorHealth(status="unhealthy", message=str(e))
