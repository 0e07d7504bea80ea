"""Labeled records consumed by the induction algorithm."""
from __future__ import annotations

from typing import Any, Iterable, Mapping


class MissingAttributeError(KeyError):
    """Raised when a record is asked for an attribute it does not carry."""

    def __init__(self, attribute: str):
        super().__init__(attribute)
        self.attribute = attribute

    def __str__(self) -> str:
        return f"record has no attribute {self.attribute!r}"


class Record:
    """A bag of named attribute values plus a category label.

    Parameters
    ----------
    attributes : mapping
        Attribute name -> value.  The semantic type of a value is whatever the
        predicates testing it expect (numbers, strings, sets...).
    category : object, default=None
        Class label.  ``None`` is allowed for records that are only classified.

    Notes
    -----
    The attribute mapping is copied on construction so later changes to the
    caller's dict do not leak into a training run.
    """

    __slots__ = ("_attributes", "_category")

    def __init__(self, attributes: Mapping[str, Any], category: Any = None):
        self._attributes = dict(attributes)
        self._category = category

    @property
    def category(self) -> Any:
        return self._category

    def attribute_names(self) -> list[str]:
        return list(self._attributes)

    def value(self, attribute: str) -> Any:
        try:
            return self._attributes[attribute]
        except KeyError:
            raise MissingAttributeError(attribute) from None

    def __repr__(self) -> str:
        return f"Record({self._attributes!r}, category={self._category!r})"


def records_from_rows(rows: Iterable[Iterable[Any]], feature_names: list[str],
                      categories: Iterable[Any] | None = None) -> list[Record]:
    """Zip tabular rows with feature names into :class:`Record` objects."""
    rows = list(rows)
    if categories is None:
        categories = [None] * len(rows)
    out = []
    for row, cat in zip(rows, categories):
        out.append(Record(dict(zip(feature_names, row)), cat))
    return out
