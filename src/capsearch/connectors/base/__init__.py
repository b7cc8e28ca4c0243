"""Base connector interface — Abstract classes and capability descriptors for backends."""

from capsearch.connectors.base.connector import (
    BackendConnector,
    CapabilityDescriptor,
    ConnectorHealth,
    FilterCapability,
    FilterOperator,
    ListingFilter,
)
from capsearch.connectors.base.registry import ConnectorRegistry

__all__ = [
    "BackendConnector",
    "CapabilityDescriptor",
    "ConnectorHealth",
    "ConnectorRegistry",
    "FilterCapability",
    "FilterOperator",
    "ListingFilter",
]
