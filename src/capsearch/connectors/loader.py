"""Connector auto-registration from settings."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from capsearch.config.settings import ConnectorConfig, Settings
    from capsearch.connectors.base.registry import ConnectorRegistry

logger = logging.getLogger(__name__)

# Maps connector names to (module_path, class_name) for lazy import
CONNECTOR_MAP: dict[str, tuple[str, str]] = {
    "memory": ("capsearch.connectors.memory.connector", "MemoryConnector"),
    "meilisearch": ("capsearch.connectors.meilisearch.connector", "MeiliSearchConnector"),
}


def connector_kwargs(name: str, config: ConnectorConfig) -> dict[str, Any]:
    """Build constructor kwargs for connector ``name`` from its config entry."""
    kwargs: dict[str, Any] = {}
    if name == "meilisearch":
        if config.hosts:
            kwargs["base_url"] = config.hosts[0]
        if config.index:
            kwargs["index"] = config.index
        if config.api_key:
            kwargs["api_key"] = config.api_key
        if config.filterable_attributes:
            kwargs["filterable_attributes"] = config.filterable_attributes
    kwargs.update(config.extra)
    return kwargs


async def register_connectors(registry: ConnectorRegistry, settings: Settings) -> list[str]:
    """Register and initialize the connectors declared in settings.

    Disabled entries and unknown names are skipped with a log message. A
    connector that fails to initialize is logged and left out.

    Returns:
        Names of the connectors that were initialized.
    """
    initialized: list[str] = []
    for name, config in settings.search.connectors.items():
        if not config.enabled:
            logger.info("Connector '%s' is disabled, skipping", name)
            continue

        entry = CONNECTOR_MAP.get(name)
        if entry is None:
            logger.warning(
                "Unknown connector '%s'. Register it manually via ConnectorRegistry.register().",
                name,
            )
            continue

        module_path, class_name = entry
        try:
            module = importlib.import_module(module_path)
            connector_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            logger.warning("Failed to import connector '%s': %s", name, e)
            continue

        registry.register(name, connector_class)
        try:
            await registry.initialize_connector(name, **connector_kwargs(name, config))
        except Exception:
            logger.warning("Failed to initialise connector '%s'", name, exc_info=True)
            continue
        initialized.append(name)
    return initialized
