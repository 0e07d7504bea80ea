import numpy as np
import pytest

from infotree import LESS_OR_EQUAL, DecisionTreeBuilder, RandomForest, Record
from infotree.forest import _modulo_subset


def _threshold_builder(n=100):
    items = [Record({"x": i}, "low" if i < n // 2 else "high") for i in range(n)]
    return (DecisionTreeBuilder()
            .set_training_set(items)
            .set_minimal_number_of_items(1)
            .set_default_predicates(LESS_OR_EQUAL))


def test_forest_has_requested_size_and_full_vote_histograms():
    forest = RandomForest.create(_threshold_builder(), 5, random_state=0)
    assert len(forest) == 5
    for x in (0, 25, 50, 75, 99):
        votes = forest.classify(Record({"x": x}))
        assert sum(votes.values()) == 5


def test_forest_majority_vote():
    forest = RandomForest.create(_threshold_builder(), 5, random_state=1)
    assert forest.predict(Record({"x": 0})) == "low"
    assert forest.predict(Record({"x": 99})) == "high"


def test_forest_is_reproducible_with_seed():
    a = RandomForest.create(_threshold_builder(), 4, random_state=42)
    b = RandomForest.create(_threshold_builder(), 4, random_state=42)
    assert a.trees == b.trees


def test_forest_restores_builder_training_set():
    builder = _threshold_builder()
    before = builder.training_set
    RandomForest.create(builder, 3, random_state=0)
    after = builder.training_set
    assert [id(r) for r in after] == [id(r) for r in before]


def test_forest_trees_are_merged():
    forest = RandomForest.create(_threshold_builder(), 3, random_state=0)
    for tree in forest:
        for node in tree.walk():
            if not node.is_leaf:
                m, nm = node.match_subtree, node.not_match_subtree
                assert not (m.is_leaf and nm.is_leaf and m.category == nm.category)


def test_modulo_subset_drops_multiples():
    items = [Record({"x": i}, i) for i in range(6)]
    assert [r.category for r in _modulo_subset(items, 2)] == [1, 3, 5]
    assert _modulo_subset(items, 1) == []


def test_forest_larger_than_training_set_still_builds():
    forest = RandomForest.create(_threshold_builder(4), 10, random_state=0)
    assert len(forest) == 10
    assert sum(forest.classify(Record({"x": 1})).values()) == 10


def test_forest_size_must_be_positive():
    with pytest.raises(ValueError):
        RandomForest.create(_threshold_builder(), 0)


class _RecordingBuilder(DecisionTreeBuilder):
    """Keeps the training set of every tree it builds."""

    def __init__(self):
        super().__init__()
        self.seen = []

    def create_decision_tree(self):
        self.seen.append(self.training_set)
        return super().create_decision_tree()


@pytest.mark.parametrize("n, size", [(12, 4), (14, 4), (7, 3)])
def test_member_training_sets(n, size):
    items = [Record({"x": i}, "low" if i < n // 2 else "high") for i in range(n)]
    builder = (_RecordingBuilder()
               .set_training_set(items)
               .set_default_predicates(LESS_OR_EQUAL))
    RandomForest.create(builder, size, random_state=7)

    shuffled = [items[i] for i in np.random.RandomState(7).permutation(n)]
    chunk = n // size
    assert len(builder.seen) == size
    for i, seen in enumerate(builder.seen):
        expected = shuffled[i * chunk:(i + 1) * chunk]
        expected += [r for j, r in enumerate(shuffled) if j % (i + 1) != 0]
        assert [id(r) for r in seen] == [id(r) for r in expected]
    if n % size:
        # trailing items only reach members through the modulo subset
        assert builder.seen[0] == shuffled[:chunk]
