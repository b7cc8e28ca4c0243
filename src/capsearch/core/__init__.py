"""Core search engine — dispatcher, shortcuts, strategies and bulk paths."""

from capsearch.core.engine import SearchEngine
from capsearch.core.enrichment import PARTIAL_RECORD_KEY, ResultEmitter, ResultSink
from capsearch.core.exceptions import (
    EmptyAndPredicate,
    InvalidPredicateValue,
    SearchError,
    UnsupportedFilter,
    UnsupportedPredicate,
)

__all__ = [
    "PARTIAL_RECORD_KEY",
    "EmptyAndPredicate",
    "InvalidPredicateValue",
    "ResultEmitter",
    "ResultSink",
    "SearchEngine",
    "SearchError",
    "UnsupportedFilter",
    "UnsupportedPredicate",
]
