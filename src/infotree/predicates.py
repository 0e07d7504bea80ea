"""
infotree.predicates
===================

Boolean tests comparing a record's attribute value (the *candidate*) with the
reference value stored in a rule.  During split search every observed value of
an attribute is tried as a reference, so the predicate alone decides what a
split means: equality for categorical data, ordering for numeric data,
membership for set-valued data.

Predicates are stateless; the module exposes one shared instance per kind.
Two predicates compare equal when they are of the same kind, which keeps rule
deduplication working for user-created instances too.
"""
from __future__ import annotations

from typing import Any


class Predicate:
    """Base class for predicates.

    Subclasses implement :meth:`test` and set ``symbol`` for rule rendering.
    """

    symbol: str = "?"

    def test(self, candidate: Any, reference: Any) -> bool:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self).__qualname__)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __str__(self) -> str:
        return self.symbol


class Equal(Predicate):
    symbol = "=="

    def test(self, candidate, reference):
        return candidate == reference


class NotEqual(Predicate):
    symbol = "!="

    def test(self, candidate, reference):
        return candidate != reference


class LessThan(Predicate):
    symbol = "<"

    def test(self, candidate, reference):
        return candidate < reference


class LessOrEqual(Predicate):
    symbol = "<="

    def test(self, candidate, reference):
        return candidate <= reference


class GreaterThan(Predicate):
    symbol = ">"

    def test(self, candidate, reference):
        return candidate > reference


class GreaterOrEqual(Predicate):
    symbol = ">="

    def test(self, candidate, reference):
        return candidate >= reference


class Contains(Predicate):
    """True when the reference value is a member of the candidate collection.

    A reference that is itself a collection (the value observed on another
    record) matches when it is a subset of the candidate.
    """

    symbol = "contains"

    def test(self, candidate, reference):
        if isinstance(reference, (set, frozenset)):
            return reference <= set(candidate)
        return reference in candidate


EQUAL = Equal()
NOT_EQUAL = NotEqual()
LESS_THAN = LessThan()
LESS_OR_EQUAL = LessOrEqual()
GREATER_THAN = GreaterThan()
GREATER_OR_EQUAL = GreaterOrEqual()
CONTAINS = Contains()

__all__ = [
    "Predicate", "Equal", "NotEqual", "LessThan", "LessOrEqual",
    "GreaterThan", "GreaterOrEqual", "Contains",
    "EQUAL", "NOT_EQUAL", "LESS_THAN", "LESS_OR_EQUAL",
    "GREATER_THAN", "GREATER_OR_EQUAL", "CONTAINS",
]
