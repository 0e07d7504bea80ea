"""Fluent configuration for decision tree induction."""
from __future__ import annotations

from typing import Iterable

from loguru import logger

from .predicates import Predicate
from .record import Record
from .tree import DecisionTree, build_decision_tree


class DecisionTreeBuilder:
    """
    Collects a training set and split configuration, then builds trees.

    Every setter returns the builder so calls can be chained::

        tree = (DecisionTreeBuilder()
                .set_training_set(records)
                .set_default_predicates(EQUAL)
                .ignore_attributes("id")
                .create_decision_tree())

    The builder is reused by :class:`~infotree.forest.RandomForest`, which
    swaps the training set for each ensemble member while keeping the rest of
    the configuration.
    """

    def __init__(self):
        self._training_set: list[Record] = []
        self._minimal_number_of_items = 1
        self._attribute_predicates: dict[str, list[Predicate]] = {}
        self._default_predicates: list[Predicate] = []
        self._ignored_attributes: set[str] = set()

    @property
    def training_set(self) -> list[Record]:
        return list(self._training_set)

    @property
    def minimal_number_of_items(self) -> int:
        return self._minimal_number_of_items

    @property
    def attribute_predicates(self) -> dict[str, list[Predicate]]:
        return {k: list(v) for k, v in self._attribute_predicates.items()}

    @property
    def default_predicates(self) -> list[Predicate]:
        return list(self._default_predicates)

    @property
    def ignored_attributes(self) -> frozenset[str]:
        return frozenset(self._ignored_attributes)

    def set_training_set(self, training_set: Iterable[Record]) -> DecisionTreeBuilder:
        self._training_set = list(training_set)
        return self

    def set_minimal_number_of_items(self, minimal_number_of_items: int) -> DecisionTreeBuilder:
        minimal_number_of_items = int(minimal_number_of_items)
        if minimal_number_of_items < 0:
            raise ValueError("minimal_number_of_items must be >= 0")
        self._minimal_number_of_items = minimal_number_of_items
        return self

    def set_attribute_predicates(self, attribute: str, *predicates: Predicate) -> DecisionTreeBuilder:
        """Use ``predicates`` (in this order) when splitting on ``attribute``."""
        self._attribute_predicates[attribute] = list(predicates)
        return self

    def set_default_predicates(self, *predicates: Predicate) -> DecisionTreeBuilder:
        """Use ``predicates`` for every attribute without its own predicate list."""
        self._default_predicates = list(predicates)
        return self

    def ignore_attributes(self, *attributes: str) -> DecisionTreeBuilder:
        self._ignored_attributes.update(attributes)
        return self

    def create_decision_tree(self) -> DecisionTree:
        """Induce a tree from the current training set and configuration."""
        tree = build_decision_tree(
            self._training_set,
            self._minimal_number_of_items,
            self._attribute_predicates,
            self._default_predicates,
            self._ignored_attributes,
        )
        logger.debug("built tree from {} items: depth={}, leaves={}",
                     len(self._training_set), tree.depth, tree.n_leaves)
        return tree

