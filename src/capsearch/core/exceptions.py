"""Search errors raised by the engine before any record is emitted."""

from __future__ import annotations


class SearchError(Exception):
    """Base exception for search engine errors."""


class UnsupportedPredicate(SearchError):
    """Raised when a predicate shape cannot be executed."""


class EmptyAndPredicate(SearchError):
    """Raised when an ``And`` predicate has no sub-predicates."""


class InvalidPredicateValue(SearchError):
    """Raised when a predicate is missing its attribute name or value."""


class UnsupportedFilter(SearchError):
    """Raised when an attribute is neither listed nor natively filterable.

    Attributes:
        attribute: The attribute that cannot be searched.
        operator: The operator the search needed (``equals``, ``contains``, ``and``).
    """

    def __init__(self, attribute: str, operator: str) -> None:
        self.attribute = attribute
        self.operator = operator
        super().__init__(f"Cannot search attribute '{attribute}' with '{operator}': not listed and not filterable")
