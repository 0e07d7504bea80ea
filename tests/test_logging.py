"""Tests for loguru logging in infotree."""

import contextlib

from loguru import logger

from infotree import EQUAL, LESS_OR_EQUAL, DecisionTreeBuilder, RandomForest, Record
from infotree.logging import LoggingHandle, enable_logging


@contextlib.contextmanager
def capture(level="TRACE"):
    messages = []
    handle = enable_logging(level=level, sink=messages.append)
    try:
        yield messages
    finally:
        handle.disable()


def _builder():
    items = [Record({"color": c}, c.upper()) for c in ("red", "blue", "red")]
    return (DecisionTreeBuilder()
            .set_training_set(items)
            .set_minimal_number_of_items(0)
            .set_default_predicates(EQUAL))


def test_logging_is_disabled_by_default():
    seen = []
    handler_id = logger.add(seen.append, level="TRACE")
    try:
        _builder().create_decision_tree()
    finally:
        logger.remove(handler_id)
    assert seen == []


def test_debug_and_trace_records_when_enabled():
    with capture() as messages:
        _builder().create_decision_tree()
    text = "".join(messages)
    assert "split 3 items on color == 'red'" in text
    assert "built tree from 3 items" in text


def test_level_filters_messages():
    with capture(level="INFO") as messages:
        _builder().create_decision_tree()
    assert messages == []


def test_oversized_forest_warns():
    builder = (DecisionTreeBuilder()
               .set_training_set([Record({"x": 1}, "A"), Record({"x": 2}, "B")])
               .set_default_predicates(LESS_OR_EQUAL))
    with capture(level="WARNING") as messages:
        RandomForest.create(builder, 5, random_state=0)
    assert len(messages) == 1
    assert "chunks are empty" in messages[0]


def test_handle_disable_is_idempotent():
    handle = enable_logging()
    assert LoggingHandle.get_active_handle_count() >= 1
    handle.disable()
    handle.disable()
    assert handle.handler_id is None
    assert LoggingHandle.get_active_handle_count() == 0
    # last handle re-disables the package logger
    seen = []
    handler_id = logger.add(seen.append, level="TRACE")
    try:
        _builder().create_decision_tree()
    finally:
        logger.remove(handler_id)
    assert seen == []
