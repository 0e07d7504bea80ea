"""Split rules: an attribute, a predicate and a reference value."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .predicates import Predicate
from .record import Record


def _freeze(value: Any) -> Any:
    # hashable stand-in for the container types records commonly carry
    if isinstance(value, (set, frozenset)):
        return frozenset(value)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        return frozenset((k, _freeze(v)) for k, v in value.items())
    return value


@dataclass(frozen=True)
class Rule:
    """Binary test ``predicate(record[attribute], value)``.

    Rules are values: two rules built from equal parts are equal and hash the
    same, which is what split search relies on to skip candidates it has
    already scored.
    """

    attribute: str
    predicate: Predicate
    value: Any

    def match(self, record: Record) -> bool:
        return bool(self.predicate.test(record.value(self.attribute), self.value))

    def negated_str(self) -> str:
        return f"NOT ({self})"

    def __hash__(self) -> int:
        return hash((self.attribute, self.predicate, _freeze(self.value)))

    def __str__(self) -> str:
        return f"{self.attribute} {self.predicate} {self.value!r}"
