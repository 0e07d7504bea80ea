import pytest

from infotree import EQUAL, LESS_OR_EQUAL, DecisionTreeBuilder, Predicate, Record, Rule
from infotree.predicates import Contains, Equal


def test_builder_chains_and_builds():
    items = [
        Record({"id": 1, "color": "red"}, "A"),
        Record({"id": 2, "color": "blue"}, "B"),
    ]
    tree = (DecisionTreeBuilder()
            .set_training_set(items)
            .set_minimal_number_of_items(0)
            .set_default_predicates(EQUAL)
            .ignore_attributes("id")
            .create_decision_tree())
    assert tree.rule == Rule("color", EQUAL, "red")


def test_builder_per_attribute_predicates_win_over_defaults():
    items = [
        Record({"age": 10}, "young"),
        Record({"age": 20}, "young"),
        Record({"age": 70}, "old"),
    ]
    builder = (DecisionTreeBuilder()
               .set_training_set(items)
               .set_minimal_number_of_items(0)
               .set_default_predicates(EQUAL)
               .set_attribute_predicates("age", LESS_OR_EQUAL))
    tree = builder.create_decision_tree()
    assert tree.rule == Rule("age", LESS_OR_EQUAL, 20)
    assert builder.attribute_predicates == {"age": [LESS_OR_EQUAL]}
    assert builder.default_predicates == [EQUAL]


def test_builder_copies_training_set():
    items = [Record({"x": 1}, "A")]
    builder = DecisionTreeBuilder().set_training_set(items)
    items.append(Record({"x": 2}, "B"))
    assert len(builder.training_set) == 1


def test_builder_rejects_negative_minimal_size():
    with pytest.raises(ValueError):
        DecisionTreeBuilder().set_minimal_number_of_items(-1)


def test_predicates_compare_by_kind():
    assert Equal() == EQUAL
    assert hash(Equal()) == hash(EQUAL)
    assert EQUAL != LESS_OR_EQUAL
    assert Rule("a", Equal(), 1) == Rule("a", EQUAL, 1)
    assert len({Rule("a", EQUAL, 1), Rule("a", Equal(), 1), Rule("a", EQUAL, 2)}) == 2


def test_rules_with_set_values_hash():
    r1 = Rule("tags", Contains(), {"a", "b"})
    r2 = Rule("tags", Contains(), {"b", "a"})
    assert r1 == r2 and hash(r1) == hash(r2)
    assert r1.match(Record({"tags": ["a", "b", "c"]}))
    assert not r1.match(Record({"tags": ["a"]}))


def test_base_predicate_is_abstract():
    with pytest.raises(NotImplementedError):
        Predicate().test(1, 1)
