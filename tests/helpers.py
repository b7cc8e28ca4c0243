"""Test helpers: record factories, capability builders and a collecting sink."""

from __future__ import annotations

from typing import Any

from capsearch.connectors.base.connector import CapabilityDescriptor, FilterCapability
from capsearch.models.record import Record

TEAMS = ("Tigers", "Cubs", "Reds")


class BatchCollector:
    """Result sink that keeps every batch it receives."""

    def __init__(self) -> None:
        self.batches: list[list[Record]] = []

    def __call__(self, records: list[Record]) -> None:
        self.batches.append(list(records))

    @property
    def records(self) -> list[Record]:
        return [r for batch in self.batches for r in batch]

    @property
    def ids(self) -> list[str]:
        return [r.id for r in self.records]


def make_records(count: int, matching: int = 0) -> list[Record]:
    """Build ``count`` records; the first ``matching`` have an email containing "test"."""
    records = []
    for i in range(1, count + 1):
        domain = "test.org" if i <= matching else "corp.org"
        records.append(
            Record(
                id=str(1000 + i),
                name=f"user{i:03d}",
                attributes={
                    "email": f"u{i}@{domain}",
                    "team": TEAMS[i % len(TEAMS)],
                    "city": "Detroit" if i % 2 else "Chicago",
                },
            )
        )
    return records


def capabilities(
    *,
    equality: set[str] | None = None,
    substring: set[str] | None = None,
    **flags: Any,
) -> CapabilityDescriptor:
    """Build a capability descriptor, with native filters when any are given."""
    filters = None
    if equality is not None or substring is not None:
        filters = FilterCapability(
            equality_attributes=frozenset(equality) if equality is not None else None,
            substring_attributes=frozenset(substring) if substring is not None else None,
        )
    if "listed_attributes" in flags:
        flags["listed_attributes"] = frozenset(flags["listed_attributes"])
    return CapabilityDescriptor(filters=filters, **flags)
