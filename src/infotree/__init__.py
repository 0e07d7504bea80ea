# infotree/__init__.py
"""
infotree: information-gain decision trees and random forests over labeled records.

Exports:
    - Record, DecisionTree, DecisionTreeBuilder, RandomForest
    - Rule and the predicate library
    - EntropyTreeClassifier, EntropyForestClassifier (scikit-learn style)
    - enable_logging
"""
from loguru import logger

from .builder import DecisionTreeBuilder
from .estimator import EntropyForestClassifier, EntropyTreeClassifier
from .forest import RandomForest
from .logging import PACKAGE_NAME, enable_logging
from .predicates import (
    CONTAINS, EQUAL, GREATER_OR_EQUAL, GREATER_THAN, LESS_OR_EQUAL, LESS_THAN,
    NOT_EQUAL, Predicate,
)
from .record import MissingAttributeError, Record
from .rule import Rule
from .tree import DecisionTree, build_decision_tree, entropy, find_best_split

logger.disable(PACKAGE_NAME)

__all__ = [
    "Record", "MissingAttributeError", "Rule", "Predicate",
    "EQUAL", "NOT_EQUAL", "LESS_THAN", "LESS_OR_EQUAL", "GREATER_THAN",
    "GREATER_OR_EQUAL", "CONTAINS",
    "DecisionTree", "DecisionTreeBuilder", "RandomForest",
    "build_decision_tree", "find_best_split", "entropy",
    "EntropyTreeClassifier", "EntropyForestClassifier",
    "enable_logging",
]
__version__ = "0.1.0"
