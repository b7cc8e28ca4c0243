"""Data models shared by the engine and the connectors."""

from capsearch.models.paging import Paginator, PagingRequest
from capsearch.models.predicate import (
    ID_ATTRIBUTE,
    NAME_ATTRIBUTE,
    And,
    AttributePredicate,
    Contains,
    Equals,
    Predicate,
)
from capsearch.models.record import Record
from capsearch.models.result import SearchResult

__all__ = [
    "ID_ATTRIBUTE",
    "NAME_ATTRIBUTE",
    "And",
    "AttributePredicate",
    "Contains",
    "Equals",
    "Paginator",
    "PagingRequest",
    "Predicate",
    "Record",
    "SearchResult",
]
