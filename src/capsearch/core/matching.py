"""Local matching helpers for manual filtering and manual pagination.

All comparisons are case-insensitive. Slicing helpers work on 0-based
paginator offsets.
"""

from __future__ import annotations

from collections.abc import Sequence

from capsearch.connectors.base.connector import FilterOperator
from capsearch.models.paging import Paginator
from capsearch.models.predicate import AttributePredicate, Contains
from capsearch.models.record import Record


def operator_of(predicate: AttributePredicate) -> FilterOperator:
    """Map an Equals/Contains predicate to its listing filter operator."""
    if isinstance(predicate, Contains):
        return FilterOperator.CONTAINS
    return FilterOperator.EQUALS


def other_operator(operator: FilterOperator) -> FilterOperator:
    if operator is FilterOperator.EQUALS:
        return FilterOperator.CONTAINS
    return FilterOperator.EQUALS


def value_matches(actual: str | None, expected: str, operator: FilterOperator) -> bool:
    if actual is None:
        return False
    if operator is FilterOperator.EQUALS:
        return actual.lower() == expected.lower()
    return expected.lower() in actual.lower()


def record_matches(record: Record, predicate: AttributePredicate) -> bool:
    expected = predicate.value_as_string
    if expected is None:
        return False
    return value_matches(record.searchable_value(predicate.attribute), expected, operator_of(predicate))


def filter_records(records: Sequence[Record], predicate: AttributePredicate) -> list[Record]:
    """Keep the records matching ``predicate``, in their original order."""
    return [r for r in records if record_matches(r, predicate)]


def first_match(records: Sequence[Record], predicate: AttributePredicate) -> Record | None:
    for record in records:
        if record_matches(record, predicate):
            return record
    return None


def window(records: Sequence[Record], paginator: Paginator) -> list[Record]:
    """Apply the paginator's skip/limit without touching its state."""
    return list(records[paginator.offset : paginator.window_end()])


def window_exhausts(total: int, paginator: Paginator) -> bool:
    """True when the paginator's window reaches the end of ``total`` records."""
    end = paginator.window_end()
    return end is None or end >= total


def slice_page(records: Sequence[Record], paginator: Paginator) -> list[Record]:
    """Cut the paginator's window out of a locally materialized result.

    Sets ``paginator.no_more_results`` and ``total_results``.
    """
    paginator.total_results = len(records)
    paginator.no_more_results = window_exhausts(len(records), paginator)
    return window(records, paginator)


def intersect(candidate_sets: Sequence[Sequence[Record]]) -> list[Record]:
    """Records present in every candidate set, in the order of the first set."""
    if not candidate_sets:
        return []
    first, *rest = candidate_sets
    others = [{r.id for r in candidates} for candidates in rest]
    return [r for r in first if all(r.id in ids for ids in others)]
