"""Predicate models — The search conditions callers hand to the engine.

The vocabulary mirrors what identity-management style callers can express.
Only a subset is executable by the engine (``Equals``, ``Contains`` and an
``And`` of exactly two of those); the remaining shapes exist so that callers
can build them and the engine can reject them explicitly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ID_ATTRIBUTE = "__id__"
NAME_ATTRIBUTE = "__name__"


class Predicate(BaseModel):
    """Base class of every predicate shape."""

    model_config = ConfigDict(frozen=True)

    @property
    def kind(self) -> str:
        return type(self).__name__


class AttributePredicate(Predicate):
    """A predicate comparing one attribute against one value."""

    attribute: str = Field(description="Attribute name, or one of the reserved id/name attributes")
    value: Any = Field(default=None, description="Comparison value")

    @property
    def value_as_string(self) -> str | None:
        if self.value is None:
            return None
        return str(self.value)

    @property
    def targets_id(self) -> bool:
        return self.attribute == ID_ATTRIBUTE

    @property
    def targets_name(self) -> bool:
        return self.attribute == NAME_ATTRIBUTE


class Equals(AttributePredicate):
    """Exact (case-insensitive) match."""


class Contains(AttributePredicate):
    """Case-insensitive substring match."""


class StartsWith(AttributePredicate):
    pass


class EndsWith(AttributePredicate):
    pass


class GreaterThan(AttributePredicate):
    pass


class LessThan(AttributePredicate):
    pass


class And(Predicate):
    """Conjunction of sub-predicates."""

    predicates: list[Predicate] = Field(default_factory=list)

    @classmethod
    def of(cls, *predicates: Predicate) -> And:
        return cls(predicates=list(predicates))


class Or(Predicate):
    predicates: list[Predicate] = Field(default_factory=list)


class Not(Predicate):
    predicate: Predicate
