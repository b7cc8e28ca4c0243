"""Observability — Structured logging setup."""

from capsearch.observability.logging import get_logger, search_context, setup_logging

__all__ = ["get_logger", "search_context", "setup_logging"]
