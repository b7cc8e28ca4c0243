"""Connector Registry — Manages registration and retrieval of backend connectors.

The registry maps connector type names to classes and keeps the initialized
instances that searches run against.
"""

from __future__ import annotations

import logging
from typing import Any

from capsearch.connectors.base.connector import BackendConnector, ConnectorHealth

logger = logging.getLogger(__name__)


class ConnectorNotFoundError(Exception):
    """Raised when a requested connector is not registered or not initialized."""


class ConnectorRegistry:
    """Registry for managing backend connector instances.

    Example:
        >>> registry = ConnectorRegistry()
        >>> registry.register("meilisearch", MeiliSearchConnector)
        >>> await registry.initialize_connector("meilisearch", base_url="http://localhost:7700")
        >>> connector = registry.get("meilisearch")
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[BackendConnector]] = {}
        self._instances: dict[str, BackendConnector] = {}

    def register(self, name: str, connector_class: type[BackendConnector]) -> None:
        """Register a connector class under ``name``."""
        if name in self._classes:
            logger.warning("Overwriting existing connector registration: %s", name)
        self._classes[name] = connector_class
        logger.info("Registered connector: %s", name)

    async def initialize_connector(self, name: str, **kwargs: Any) -> BackendConnector:
        """Create and initialize a connector instance.

        Args:
            name: The registered connector name.
            **kwargs: Configuration parameters passed to the connector constructor.

        Returns:
            The initialized connector instance.

        Raises:
            ConnectorNotFoundError: If no connector is registered under this name.
        """
        if name not in self._classes:
            raise ConnectorNotFoundError(
                f"No connector registered with name '{name}'. "
                f"Available connectors: {list(self._classes.keys())}"
            )

        connector = self._classes[name](**kwargs)
        await connector.initialize()
        self._instances[name] = connector
        logger.info("Initialized connector: %s", name)
        return connector

    def add_instance(self, connector: BackendConnector) -> None:
        """Track an already-initialized connector under its own name."""
        self._instances[connector.name] = connector

    def get(self, name: str) -> BackendConnector:
        """Get an initialized connector by name.

        Raises:
            ConnectorNotFoundError: If the connector is not initialized.
        """
        if name not in self._instances:
            raise ConnectorNotFoundError(
                f"Connector '{name}' is not initialized. Call initialize_connector() first."
            )
        return self._instances[name]

    async def health_check_all(self) -> dict[str, ConnectorHealth]:
        """Run health checks on all initialized connectors."""
        results: dict[str, ConnectorHealth] = {}
        for name, connector in self._instances.items():
            try:
                results[name] = await connector.health_check()
            except Exception as e:
                results[name] = ConnectorHealth(status="unhealthy", message=str(e))
        return results

    async def shutdown_all(self) -> None:
        """Gracefully shut down all initialized connectors."""
        for name, connector in self._instances.items():
            try:
                await connector.shutdown()
                logger.info("Shut down connector: %s", name)
            except Exception:
                logger.warning("Error shutting down connector: %s", name, exc_info=True)
        self._instances.clear()

    @property
    def registered_connectors(self) -> list[str]:
        return list(self._classes.keys())

    @property
    def active_connectors(self) -> list[str]:
        return list(self._instances.keys())
