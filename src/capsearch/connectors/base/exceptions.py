"""Connector-specific exceptions.

The engine never catches these: a failing backend call aborts the current
search and the exception reaches the caller unchanged.
"""


class ConnectorError(Exception):
    """Base exception for connector errors."""


class ConnectionError(ConnectorError):
    """Raised when the connector cannot reach its backend."""


class QueryError(ConnectorError):
    """Raised when a listing or lookup call fails."""


class ConfigurationError(ConnectorError):
    """Raised when connector configuration is invalid."""
