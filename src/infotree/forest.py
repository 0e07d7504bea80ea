"""
infotree.forest
===============

Random forest of entropy-induced decision trees.

Each ensemble member is trained on its own slice of one shuffled copy of the
training set, extended with every item whose shuffled position is not a
multiple of the member's 1-based index.  Members therefore see different,
overlapping subsets; the first member only sees its own slice.  Trees are
merged (:meth:`~infotree.tree.DecisionTree.merge_redundant_rules`) before
being stored.  Classification returns the per-category vote histogram.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Iterator

from loguru import logger
from sklearn.utils import check_random_state

from .builder import DecisionTreeBuilder
from .record import Record
from .tree import DecisionTree, most_common


def _modulo_subset(items: list[Record], member_number: int) -> list[Record]:
    return [item for i, item in enumerate(items) if i % member_number != 0]


class RandomForest:
    """An ordered collection of independently trained decision trees."""

    def __init__(self, trees: list[DecisionTree] | None = None):
        self._trees: list[DecisionTree] = list(trees or [])

    @property
    def trees(self) -> list[DecisionTree]:
        return list(self._trees)

    def __len__(self) -> int:
        return len(self._trees)

    def __iter__(self) -> Iterator[DecisionTree]:
        return iter(self._trees)

    @classmethod
    def create(cls, builder: DecisionTreeBuilder, size: int,
               random_state=None) -> RandomForest:
        """
        Train ``size`` trees on resampled subsets of ``builder.training_set``.

        Parameters
        ----------
        builder : DecisionTreeBuilder
            Supplies the training set and the split configuration.  Its
            training set is restored once the forest is built.
        size : int
            Number of ensemble members.
        random_state : int, numpy RandomState or None, default=None
            Seed for the shuffle of the training set.

        Returns
        -------
        RandomForest

        Raises
        ------
        ValueError
            If ``size`` is not positive.
        """
        size = int(size)
        if size <= 0:
            raise ValueError("size must be a positive number of trees")
        rng = check_random_state(random_state)

        original = builder.training_set
        items = [original[i] for i in rng.permutation(len(original))]
        chunk_size = len(items) // size
        if chunk_size == 0:
            logger.warning("forest of {} trees over {} items: chunks are empty", size, len(items))

        trees = []
        try:
            for i in range(size):
                training_set = items[i * chunk_size:(i + 1) * chunk_size]
                training_set += _modulo_subset(items, i + 1)
                tree = builder.set_training_set(training_set).create_decision_tree()
                trees.append(tree.merge_redundant_rules())
                logger.debug("forest member {}/{}: {} items, {} leaves",
                             i + 1, size, len(training_set), tree.n_leaves)
        finally:
            builder.set_training_set(original)
        return cls(trees)

    def classify(self, record: Record) -> dict[Any, int]:
        """Return ``{category: number of trees voting for it}``."""
        return dict(Counter(tree.classify(record) for tree in self._trees))

    def predict(self, record: Record) -> Any:
        """Category with the most votes; ties resolved like leaf majorities."""
        return most_common(self.classify(record))
