"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from helpers import BatchCollector, capabilities

from capsearch.config.settings import SearchSettings, Settings
from capsearch.connectors.memory.connector import MemoryConnector
from capsearch.core.engine import SearchEngine
from capsearch.models.record import Record


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def search_settings() -> SearchSettings:
    return SearchSettings(import_batch_size=15, default_filter_page_size=20)


@pytest.fixture
def sink() -> BatchCollector:
    return BatchCollector()


@pytest.fixture
def make_connector() -> Callable[..., MemoryConnector]:
    """Factory: ``make_connector(records, **capability_kwargs)``."""

    def _make(records: list[Record], **kwargs: Any) -> MemoryConnector:
        return MemoryConnector(records=records, capabilities=capabilities(**kwargs))

    return _make


@pytest.fixture
def make_engine(
    make_connector: Callable[..., MemoryConnector], search_settings: SearchSettings
) -> Callable[..., tuple[SearchEngine, MemoryConnector]]:
    """Factory: ``make_engine(records, **capability_kwargs) -> (engine, connector)``."""

    def _make(records: list[Record], **kwargs: Any) -> tuple[SearchEngine, MemoryConnector]:
        connector = make_connector(records, **kwargs)
        return SearchEngine(connector, search_settings), connector

    return _make
