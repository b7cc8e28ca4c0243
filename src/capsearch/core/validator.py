"""Predicate validation — Rejects shapes the engine cannot execute.

Accepted shapes:
  - ``None`` (match everything)
  - ``Equals`` / ``Contains`` with a non-blank attribute and value
  - ``And`` of exactly two ``Equals``/``Contains`` on distinct attributes

Validation runs before any backend call, so a rejected search never emits.
"""

from __future__ import annotations

from capsearch.core.exceptions import EmptyAndPredicate, InvalidPredicateValue, UnsupportedPredicate
from capsearch.models.predicate import And, AttributePredicate, Contains, Equals, Predicate

AND_ARITY = 2


def _is_blank(text: str | None) -> bool:
    return text is None or not text.strip()


def _validate_attribute_predicate(predicate: AttributePredicate) -> None:
    if _is_blank(predicate.attribute):
        raise InvalidPredicateValue(f"{predicate.kind} predicate requires an attribute name")
    if _is_blank(predicate.value_as_string):
        raise InvalidPredicateValue(f"{predicate.kind} predicate on '{predicate.attribute}' requires a non-blank value")


def _validate_and(predicate: And) -> None:
    children = predicate.predicates
    if not children:
        raise EmptyAndPredicate("And predicate has no sub-predicates")
    if len(children) != AND_ARITY:
        raise UnsupportedPredicate(f"And predicate must have exactly {AND_ARITY} sub-predicates, got {len(children)}")

    seen: set[str] = set()
    for child in children:
        if not isinstance(child, (Equals, Contains)):
            raise UnsupportedPredicate(f"And sub-predicates must be Equals or Contains, got {child.kind}")
        _validate_attribute_predicate(child)
        if child.attribute in seen:
            raise UnsupportedPredicate(f"And predicate names attribute '{child.attribute}' more than once")
        seen.add(child.attribute)


def validate_predicate(predicate: Predicate | None) -> None:
    """Check that ``predicate`` is executable.

    Raises:
        UnsupportedPredicate: For shapes other than None, Equals, Contains or a two-way And.
        EmptyAndPredicate: For an And with no sub-predicates.
        InvalidPredicateValue: For a blank attribute name or value.
    """
    if predicate is None:
        return
    if isinstance(predicate, (Equals, Contains)):
        _validate_attribute_predicate(predicate)
    elif isinstance(predicate, And):
        _validate_and(predicate)
    else:
        raise UnsupportedPredicate(f"Unsupported predicate type: {predicate.kind}")
