"""Base connector — Abstract interface and capability descriptors for backends.

Every backend must implement ``BackendConnector`` to be searchable through
the engine. A connector is responsible for:
  1. Listing records, optionally with a native filter and a paginator
  2. Fetching a single record by identifier (and, if declared, by name)
  3. Declaring what it can do through a ``CapabilityDescriptor``
  4. Reporting health status

The engine never subclasses or special-cases connectors. All behaviour
selection is driven by the declared capabilities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from capsearch.models.paging import Paginator
from capsearch.models.record import Record


class FilterOperator(str, Enum):
    """Operators a backend may apply natively."""

    EQUALS = "equals"
    CONTAINS = "contains"


class FilterCapability(BaseModel):
    """Attributes a backend can filter on natively, by operator.

    Either set may be empty, absent or overlap with the other. The
    identifier and name attributes only belong in ``substring_attributes``;
    exact id/name matching is handled by point lookups.
    """

    model_config = ConfigDict(frozen=True)

    equality_attributes: frozenset[str] | None = Field(default=None)
    substring_attributes: frozenset[str] | None = Field(default=None)

    def supports_equality(self, attribute: str) -> bool:
        return self.equality_attributes is not None and attribute in self.equality_attributes

    def supports_substring(self, attribute: str) -> bool:
        return self.substring_attributes is not None and attribute in self.substring_attributes

    def supports(self, attribute: str, operator: FilterOperator) -> bool:
        if operator is FilterOperator.EQUALS:
            return self.supports_equality(attribute)
        return self.supports_substring(attribute)


class CapabilityDescriptor(BaseModel):
    """Read-only facts about what a backend supports.

    Built once per connector and shared by every search against it.
    """

    model_config = ConfigDict(frozen=True)

    native_pagination: bool = Field(default=False, description="Backend honours paginator offset/size")
    max_page_size: int | None = Field(default=None, description="Largest page the backend will return")
    listing_returns_full_detail: bool = Field(
        default=False, description="Listing returns complete records, no follow-up fetch needed"
    )
    listing_includes_name: bool = Field(default=False, description="Listing output carries the display name")
    supports_fetch_by_name: bool = Field(default=False, description="Backend can look a record up by name")
    listed_attributes: frozenset[str] = Field(
        default_factory=frozenset, description="Attributes present in listing output"
    )
    filtering_requires_full_import: bool = Field(
        default=False, description="Manual filtering must traverse the complete record set"
    )
    filters: FilterCapability | None = Field(default=None, description="Native filtering support")

    def is_enumerable(self, attribute: str) -> bool:
        """True if a plain listing call returns ``attribute``."""
        return self.listing_returns_full_detail or attribute in self.listed_attributes

    def supports_native_filter(self, attribute: str, operator: FilterOperator) -> bool:
        return self.filters is not None and self.filters.supports(attribute, operator)

    def supports_any_native_filter(self, attribute: str) -> bool:
        return self.supports_native_filter(attribute, FilterOperator.EQUALS) or self.supports_native_filter(
            attribute, FilterOperator.CONTAINS
        )

    @property
    def has_page_maximum(self) -> bool:
        return self.native_pagination and self.max_page_size is not None and self.max_page_size > 0


class ListingFilter(BaseModel):
    """A native filter carried by a listing call.

    ``criteria`` maps attribute names to values; all pairs must hold.
    """

    model_config = ConfigDict(frozen=True)

    criteria: dict[str, str] = Field(default_factory=dict)
    operator: FilterOperator = Field(default=FilterOperator.EQUALS)

    @classmethod
    def single(cls, attribute: str, value: str, operator: FilterOperator) -> ListingFilter:
        return cls(criteria={attribute: value}, operator=operator)

    def __str__(self) -> str:
        if not self.criteria:
            return "none"
        pairs = ",".join(f"{k}:{v}" for k, v in self.criteria.items())
        return f"{self.operator.value}({pairs})"


class ConnectorHealth(BaseModel):
    """Health status of a backend connector."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class BackendConnector(ABC):
    """Abstract base class for backend connectors.

    All connectors must implement:
      - capabilities: Declare native filtering/pagination support
      - list_records(): List records with an optional native filter
      - fetch_by_id(): Retrieve a single record by identifier
      - health_check(): Report connector health status

    Connectors are shared between concurrent searches. They must keep no
    per-search state; everything a page needs travels in the paginator and
    the prefetch context.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique connector name (e.g., 'memory', 'meilisearch')."""

    @property
    @abstractmethod
    def capabilities(self) -> CapabilityDescriptor:
        """Capability descriptor for this backend."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the connector (connections, pools, etc.)."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Release connections and other resources."""

    @abstractmethod
    async def list_records(
        self,
        listing_filter: ListingFilter | None,
        paginator: Paginator,
        result_cap: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> list[Record]:
        """List records from the backend.

        Args:
            listing_filter: Native filter to apply, or None for a plain listing.
            paginator: Page window to honour when the backend paginates natively.
                Implementations must set ``paginator.no_more_results`` (and
                ``token`` if the backend issues one).
            result_cap: Optional hard cap on the number of records returned.
            context: Prefetch context shared by all calls of one page.

        Returns:
            Records in backend order.
        """

    @abstractmethod
    async def fetch_by_id(self, record_id: str, context: dict[str, Any] | None = None) -> Record | None:
        """Retrieve a single full-detail record by identifier, or None if absent."""

    async def fetch_by_name(self, name: str, context: dict[str, Any] | None = None) -> Record | None:
        """Retrieve a single record by unique display name, or None if absent.

        Only called when ``capabilities.supports_fetch_by_name`` is true.
        """
        raise NotImplementedError(f"Connector '{self.name}' does not support lookup by name")

    async def prefetch_context(self) -> dict[str, Any]:
        """Return shared per-page state passed through a page's backend calls."""
        return {}

    @abstractmethod
    async def health_check(self) -> ConnectorHealth:
        """Check the health of the backend."""
