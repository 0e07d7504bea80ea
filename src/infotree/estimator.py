# -*- coding: utf-8 -*-
"""
infotree.estimator
==================

scikit-learn style wrappers around :class:`~infotree.builder.DecisionTreeBuilder`
and :class:`~infotree.forest.RandomForest`.

Rows of ``X`` become :class:`~infotree.record.Record` objects keyed by feature
name.  Numeric features are split with ``<=`` rules and categorical features
with ``==`` rules unless ``predicates`` says otherwise for a feature.
"""

from __future__ import annotations

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.exceptions import NotFittedError

from .builder import DecisionTreeBuilder
from .forest import RandomForest
from .predicates import EQUAL, LESS_OR_EQUAL, Predicate
from .record import records_from_rows


_NOT_FITTED = "Estimator not fitted. Call fit(...) first."


def _as_predicate_list(predicates):
    if predicates is None:
        return []
    if isinstance(predicates, Predicate):
        return [predicates]
    return list(predicates)


class _RecordEstimatorMixin:
    """Shared conversion from arrays to records and builder configuration."""

    def _resolve_feature_names(self, X, feature_names):
        n_features = X.shape[1]
        if feature_names is None:
            feature_names = self.feature_names
        if feature_names is None and getattr(self, "_columns", None) is not None:
            feature_names = self._columns
        if feature_names is None:
            feature_names = [f"f{i}" for i in range(n_features)]
        feature_names = [str(n) for n in feature_names]
        if len(feature_names) != n_features:
            raise ValueError("feature_names length must match X.shape[1]")
        return feature_names

    def _as_2d(self, X):
        self._columns = list(X.columns) if hasattr(X, "columns") else None
        X = np.asarray(X, dtype=object)
        if X.ndim != 2:
            raise ValueError("X must be a 2-dimensional array-like")
        return X

    def _configure_builder(self, names) -> DecisionTreeBuilder:
        cf = [] if self.categorical_features is None else list(self.categorical_features)
        cats = {names[c] if isinstance(c, (int, np.integer)) else str(c) for c in cf}
        unknown = cats - set(names)
        if unknown:
            raise ValueError(f"unknown categorical_features: {sorted(unknown)}")
        overrides = self.predicates or {}

        builder = DecisionTreeBuilder().set_minimal_number_of_items(self.minimal_number_of_items)
        for name in names:
            if name in overrides:
                preds = _as_predicate_list(overrides[name])
            elif name in cats:
                preds = [EQUAL]
            else:
                preds = [LESS_OR_EQUAL]
            builder.set_attribute_predicates(name, *preds)
        ignored = [] if self.ignored_features is None else list(self.ignored_features)
        builder.ignore_attributes(*[str(f) for f in ignored])
        return builder

    def _prepare_fit(self, X, y, feature_names):
        X = self._as_2d(X)
        y = np.asarray(y)
        if len(X) != len(y):
            raise ValueError("X and y must have the same number of rows")
        self.feature_names_ = self._resolve_feature_names(X, feature_names)
        self.n_features_ = X.shape[1]
        self.classes_ = np.unique(y)
        builder = self._configure_builder(self.feature_names_)
        builder.set_training_set(records_from_rows(X.tolist(), self.feature_names_, y.tolist()))
        return builder

    def _records(self, X):
        X = np.asarray(X, dtype=object)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        if X.shape[1] != self.n_features_:
            raise ValueError(f"X has {X.shape[1]} features, expected {self.n_features_}")
        return records_from_rows(X.tolist(), self.feature_names_)


class EntropyTreeClassifier(_RecordEstimatorMixin, ClassifierMixin, BaseEstimator):
    """
    Decision tree classifier induced by exhaustive information-gain search.

    Parameters
    ----------
    minimal_number_of_items : int, default=1
        Nodes reached by this many training rows or fewer become leaves.
    categorical_features : list[int | str] or None, default=None
        Indices or names of categorical features, split with equality rules.
        All other features are split with ``<=`` rules.
    predicates : dict[str, Predicate | list[Predicate]] or None, default=None
        Per-feature predicates overriding the defaults above.
    ignored_features : list[str] or None, default=None
        Feature names never used for splitting.
    merge_rules : bool, default=True
        Collapse splits whose children predict the same class after fitting.
    feature_names : list[str] or None, default=None
        Names used as record attributes and in exported rules.

    Attributes
    ----------
    tree_ : DecisionTree
        The fitted tree.
    classes_ : ndarray
        Sorted class labels seen during ``fit``.
    feature_names_ : list[str]
        Feature names in column order.
    """

    def __init__(
        self,
        *,
        minimal_number_of_items: int = 1,
        categorical_features=None,
        predicates=None,
        ignored_features=None,
        merge_rules: bool = True,
        feature_names=None,
    ):
        self.minimal_number_of_items = minimal_number_of_items
        self.categorical_features = categorical_features
        self.predicates = predicates
        self.ignored_features = ignored_features
        self.merge_rules = merge_rules
        self.feature_names = feature_names

    def fit(self, X, y, feature_names=None):
        builder = self._prepare_fit(X, y, feature_names)
        tree = builder.create_decision_tree()
        if self.merge_rules:
            tree.merge_redundant_rules()
        self.tree_ = tree
        return self

    def _check_fitted(self):
        if getattr(self, "tree_", None) is None:
            raise NotFittedError(_NOT_FITTED)

    def predict(self, X):
        """
        Predict class labels for the provided samples.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)

        Returns
        -------
        ndarray of shape (n_samples,)
        """
        self._check_fitted()
        return np.array([self.tree_.classify(r) for r in self._records(X)])

    def predict_proba(self, X):
        """One-hot class probabilities; a single tree has no vote spread."""
        self._check_fitted()
        records = self._records(X)
        index = {c: i for i, c in enumerate(self.classes_.tolist())}
        proba = np.zeros((len(records), len(self.classes_)))
        for row, record in enumerate(records):
            proba[row, index[self.tree_.classify(record)]] = 1.0
        return proba

    def predict_rule(self, X):
        """Return the antecedent each sample satisfies on its way to a leaf."""
        self._check_fitted()
        return [self.tree_.trace_rule(r) for r in self._records(X)]

    def export_rules(self):
        self._check_fitted()
        return self.tree_.export_rules()

    def print_tree(self):
        self._check_fitted()
        self.tree_.print_tree()


class EntropyForestClassifier(_RecordEstimatorMixin, ClassifierMixin, BaseEstimator):
    """
    Random forest of :class:`EntropyTreeClassifier`-style trees.

    Accepts every parameter of :class:`EntropyTreeClassifier` except
    ``merge_rules`` (forest members are always merged), plus:

    Parameters
    ----------
    n_estimators : int, default=10
        Number of trees.
    random_state : int, RandomState or None, default=None
        Seed for the shuffle that assigns training rows to trees.

    Attributes
    ----------
    forest_ : RandomForest
        The fitted ensemble.
    """

    def __init__(
        self,
        *,
        n_estimators: int = 10,
        minimal_number_of_items: int = 1,
        categorical_features=None,
        predicates=None,
        ignored_features=None,
        random_state=None,
        feature_names=None,
    ):
        self.n_estimators = n_estimators
        self.minimal_number_of_items = minimal_number_of_items
        self.categorical_features = categorical_features
        self.predicates = predicates
        self.ignored_features = ignored_features
        self.random_state = random_state
        self.feature_names = feature_names

    def fit(self, X, y, feature_names=None):
        builder = self._prepare_fit(X, y, feature_names)
        self.forest_ = RandomForest.create(builder, self.n_estimators, random_state=self.random_state)
        return self

    def _check_fitted(self):
        if getattr(self, "forest_", None) is None:
            raise NotFittedError(_NOT_FITTED)

    def predict_proba(self, X):
        """
        Fraction of trees voting for each class.

        Trees trained on an empty subset vote ``None``; such votes count
        towards no class, so rows may sum to less than 1.
        """
        self._check_fitted()
        records = self._records(X)
        index = {c: i for i, c in enumerate(self.classes_.tolist())}
        proba = np.zeros((len(records), len(self.classes_)))
        for row, record in enumerate(records):
            for category, votes in self.forest_.classify(record).items():
                if category in index:
                    proba[row, index[category]] = votes
        proba /= max(len(self.forest_), 1)
        return proba

    def predict(self, X):
        proba = self.predict_proba(X)
        return self.classes_[np.argmax(proba, axis=1)]
