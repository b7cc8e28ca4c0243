"""Tests for structured logging setup."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from helpers import make_records

from capsearch.config.settings import ObservabilitySettings
from capsearch.connectors.memory.connector import MemoryConnector
from capsearch.core.engine import SearchEngine
from capsearch.observability.logging import HANDLER_NAME, get_logger, search_context, setup_logging


def _handler() -> logging.Handler:
    handlers = [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]
    assert len(handlers) == 1
    return handlers[0]


def _record(message: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("capsearch.core.engine", logging.INFO, __file__, 1, message, args, None)


@pytest.fixture(autouse=True)
def _remove_handler():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)


class TestSetupLogging:
    def test_console_renderer(self) -> None:
        setup_logging(ObservabilitySettings(log_format="console", log_level="debug"))
        formatter = _handler().formatter
        assert isinstance(formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(formatter.processors[-1], structlog.dev.ConsoleRenderer)
        assert logging.getLogger().level == logging.DEBUG

    def test_json_renderer_by_default(self) -> None:
        setup_logging()
        formatter = _handler().formatter
        assert isinstance(formatter.processors[-1], structlog.processors.JSONRenderer)

    def test_repeated_setup_keeps_one_handler(self) -> None:
        setup_logging()
        setup_logging()
        _handler()

    def test_get_logger(self) -> None:
        setup_logging()
        assert get_logger("capsearch.test") is not None


class TestSearchContext:
    def test_stdlib_records_carry_bound_fields(self) -> None:
        setup_logging()
        with search_context(connector="memory", search_id="srch_abc"):
            payload = json.loads(_handler().format(_record("Search on '%s'", "memory")))

        assert payload["event"] == "Search on 'memory'"
        assert payload["connector"] == "memory"
        assert payload["search_id"] == "srch_abc"
        assert payload["logger"] == "capsearch.core.engine"
        assert payload["level"] == "info"

    def test_fields_unbound_after_block(self) -> None:
        setup_logging()
        with search_context(connector="memory"):
            pass
        payload = json.loads(_handler().format(_record("after")))
        assert "connector" not in payload

    async def test_engine_binds_connector_during_search(self) -> None:
        seen: list[dict] = []

        def sink(records) -> None:
            seen.append(structlog.contextvars.get_contextvars())

        engine = SearchEngine(MemoryConnector(records=make_records(3), name="crm"))
        await engine.search(None, sink)

        assert seen[0]["connector"] == "crm"
        assert seen[0]["search_id"].startswith("srch_")
        assert "connector" not in structlog.contextvars.get_contextvars()
