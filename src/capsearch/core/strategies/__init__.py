"""Predicate strategies — Route a predicate to native or manual filtering."""

from capsearch.core.strategies.base import SearchStrategy
from capsearch.core.strategies.conjunction import AndStrategy
from capsearch.core.strategies.contains import ContainsStrategy
from capsearch.core.strategies.equals import EqualsStrategy
from capsearch.core.strategies.native import NativeFilterFetch

__all__ = [
    "AndStrategy",
    "ContainsStrategy",
    "EqualsStrategy",
    "NativeFilterFetch",
    "SearchStrategy",
]
