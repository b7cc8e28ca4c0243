"""Tests for the connector registry and settings-driven registration."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from helpers import make_records

from capsearch.config.settings import ConnectorConfig, SearchSettings, Settings
from capsearch.connectors.base.registry import ConnectorNotFoundError, ConnectorRegistry
from capsearch.connectors.loader import connector_kwargs, register_connectors
from capsearch.connectors.memory.connector import MemoryConnector

# ── Registry ─────────────────────────────────────────────────────────────────


class TestConnectorRegistry:
    async def test_register_and_initialize(self) -> None:
        registry = ConnectorRegistry()
        registry.register("memory", MemoryConnector)
        connector = await registry.initialize_connector("memory", records=make_records(2))
        assert registry.get("memory") is connector
        assert registry.registered_connectors == ["memory"]
        assert registry.active_connectors == ["memory"]

    async def test_unknown_connector(self) -> None:
        registry = ConnectorRegistry()
        with pytest.raises(ConnectorNotFoundError, match="No connector registered"):
            await registry.initialize_connector("nope")

    def test_get_uninitialized(self) -> None:
        registry = ConnectorRegistry()
        registry.register("memory", MemoryConnector)
        with pytest.raises(ConnectorNotFoundError, match="not initialized"):
            registry.get("memory")

    def test_add_instance(self) -> None:
        registry = ConnectorRegistry()
        connector = MemoryConnector(name="static")
        registry.add_instance(connector)
        assert registry.get("static") is connector

    async def test_health_check_all(self) -> None:
        registry = ConnectorRegistry()
        registry.add_instance(MemoryConnector(name="ok"))
        broken = MemoryConnector(name="broken")
        broken.health_check = AsyncMock(side_effect=RuntimeError("boom"))  # type: ignore[method-assign]
        registry.add_instance(broken)

        results = await registry.health_check_all()
        assert results["ok"].status == "healthy"
        assert results["broken"].status == "unhealthy"
        assert results["broken"].message == "boom"

    async def test_shutdown_all_continues_after_failure(self) -> None:
        registry = ConnectorRegistry()
        failing = MemoryConnector(name="failing")
        failing.shutdown = AsyncMock(side_effect=RuntimeError("boom"))  # type: ignore[method-assign]
        healthy = MemoryConnector(name="healthy")
        healthy.shutdown = AsyncMock()  # type: ignore[method-assign]
        registry.add_instance(failing)
        registry.add_instance(healthy)

        await registry.shutdown_all()
        healthy.shutdown.assert_awaited_once()
        assert registry.active_connectors == []


# ── Loader ───────────────────────────────────────────────────────────────────


class TestConnectorLoader:
    def test_meilisearch_kwargs(self) -> None:
        config = ConnectorConfig(
            hosts=["http://meili:7700"],
            index="accounts",
            api_key="k",
            filterable_attributes=["team"],
            extra={"timeout": 5},
        )
        assert connector_kwargs("meilisearch", config) == {
            "base_url": "http://meili:7700",
            "index": "accounts",
            "api_key": "k",
            "filterable_attributes": ["team"],
            "timeout": 5,
        }

    def test_memory_kwargs_come_from_extra(self) -> None:
        config = ConnectorConfig(hosts=["ignored"], extra={"records": [{"id": "1"}]})
        assert connector_kwargs("memory", config) == {"records": [{"id": "1"}]}

    async def test_register_from_settings(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            search=SearchSettings(
                connectors={
                    "memory": ConnectorConfig(
                        extra={
                            "records": [{"id": "1", "name": "one"}],
                            "capabilities": {"listing_returns_full_detail": True},
                        }
                    ),
                    "meilisearch": ConnectorConfig(enabled=False),
                    "unknown": ConnectorConfig(),
                }
            ),
        )
        registry = ConnectorRegistry()
        initialized = await register_connectors(registry, settings)

        assert initialized == ["memory"]
        assert registry.get("memory").capabilities.listing_returns_full_detail is True
        assert "meilisearch" not in registry.registered_connectors

    async def test_failed_initialization_is_skipped(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            search=SearchSettings(
                connectors={"memory": ConnectorConfig(extra={"records": [{"id": "1"}, {"id": "1"}]})}
            ),
        )
        registry = ConnectorRegistry()
        assert await register_connectors(registry, settings) == []
        assert registry.active_connectors == []
