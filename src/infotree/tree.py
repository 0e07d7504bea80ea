# -*- coding: utf-8 -*-
"""
infotree.tree
=============

This module implements decision tree induction by recursive, entropy driven
binary partitioning.  Every node of a tree is either a leaf carrying a
predicted category or an internal node carrying a :class:`~infotree.rule.Rule`
and two subtrees: one for the records the rule matches and one for the rest.

Split search is exhaustive over the training data: for every record, every
attribute it carries (minus the ignored ones) and every predicate configured
for that attribute, the record's own value is used as the reference value of
a candidate rule.  The candidate with the largest information gain wins;
ties keep the first candidate found.  Predicates decide what a match means, so
the search never needs to sort or bin attribute values.

After induction, :meth:`DecisionTree.merge_redundant_rules` removes splits
whose two children predict the same category.  The module also provides
rule tracing, rule export, pretty printing and Graphviz export of a tree.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Sequence

import numpy as np
from loguru import logger

from .predicates import Predicate
from .record import Record
from .rule import Rule


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _entropy(counts) -> float:
    dist = np.asarray(list(counts), dtype=float)
    tot = dist.sum()
    if tot <= 0:
        return 0.0
    p = dist / tot
    p = p[p > 0]
    return float(-np.sum(p * np.log(p)))


def entropy(items: Sequence[Record]) -> float:
    """Shannon entropy (natural log) of the category distribution of ``items``.

    An empty sequence has entropy 0.
    """
    return _entropy(Counter(item.category for item in items).values())


def most_frequent_category(items: Sequence[Record]) -> Any:
    """
    Return the category carried by the largest number of ``items``.

    Ties are broken deterministically: the smallest tied category under its
    natural ordering wins.  When the tied categories cannot be ordered against
    each other, the one seen first in ``items`` wins.  An empty sequence has
    no category and yields ``None``.
    """
    counts = Counter(item.category for item in items)
    return most_common(counts)


def most_common(counts: Mapping[Any, int]) -> Any:
    """Key with the highest count in ``counts``, tie-broken as in :func:`most_frequent_category`."""
    if not counts:
        return None
    top = max(counts.values())
    tied = [c for c, n in counts.items() if n == top]
    if len(tied) == 1:
        return tied[0]
    try:
        return min(tied)
    except TypeError:
        return tied[0]


def _predicates_for(attribute: str,
                    attribute_predicates: Mapping[str, Sequence[Predicate]],
                    default_predicates: Sequence[Predicate] | None) -> Sequence[Predicate]:
    preds = attribute_predicates.get(attribute)
    if preds:
        return preds
    if default_predicates:
        return default_predicates
    return ()


# -----------------------------------------------------------------------------
# Split search
# -----------------------------------------------------------------------------
@dataclass
class SplitResult:
    """Partition of an item set under ``rule``.  Only lives during induction."""

    rule: Rule
    matched: list[Record]
    not_matched: list[Record]
    gain: float = 0.0


def split(rule: Rule, items: Sequence[Record]) -> SplitResult:
    matched, not_matched = [], []
    for item in items:
        if rule.match(item):
            matched.append(item)
        else:
            not_matched.append(item)
    return SplitResult(rule, matched, not_matched)


def find_best_split(items: Sequence[Record],
                    attribute_predicates: Mapping[str, Sequence[Predicate]] | None = None,
                    default_predicates: Sequence[Predicate] | None = None,
                    ignored_attributes=frozenset()) -> SplitResult | None:
    """
    Search the rule with the highest information gain over ``items``.

    Parameters
    ----------
    items : sequence of Record
        The records reaching the node being split.
    attribute_predicates : mapping, optional
        Attribute name -> predicates to try for that attribute.
    default_predicates : sequence of Predicate, optional
        Predicates for attributes without a (non-empty) entry above.
    ignored_attributes : collection of str
        Attributes never used for splitting.

    Returns
    -------
    SplitResult or None
        The winning split, or ``None`` when no candidate has positive gain.
    """
    attribute_predicates = attribute_predicates or {}
    n = len(items)
    if n == 0:
        return None
    initial_entropy = entropy(items)

    best_gain = 0.0
    best: SplitResult | None = None
    tested: set[Rule] = set()

    for base in items:
        for attr in base.attribute_names():
            if attr in ignored_attributes:
                continue
            value = base.value(attr)
            for pred in _predicates_for(attr, attribute_predicates, default_predicates):
                rule = Rule(attr, pred, value)
                if rule in tested:
                    continue
                tested.add(rule)

                result = split(rule, items)
                p_matched = len(result.matched) / n
                p_not_matched = len(result.not_matched) / n
                gain = (initial_entropy
                        - p_matched * entropy(result.matched)
                        - p_not_matched * entropy(result.not_matched))
                if gain > best_gain:
                    best_gain = gain
                    result.gain = gain
                    best = result
    return best


# -----------------------------------------------------------------------------
# Node
# -----------------------------------------------------------------------------
class DecisionTree:
    """A node of a binary decision tree, and the subtree rooted at it.

    A node is a leaf iff ``rule`` is ``None``.  Leaves carry ``category``;
    internal nodes carry ``rule``, ``match_subtree`` (records for which the
    rule holds) and ``not_match_subtree``.

    Parameters
    ----------
    category : object, default=None
        Predicted category of a leaf.  ``None`` on internal nodes, and on the
        leaf induced from an empty item set.
    rule : Rule or None, default=None
        Splitting rule of an internal node.
    match_subtree, not_match_subtree : DecisionTree or None
        Children of an internal node.  Both are required when ``rule`` is set.

    Raises
    ------
    ValueError
        If an internal node is created without both subtrees.
    """

    __slots__ = ("category", "rule", "match_subtree", "not_match_subtree")

    def __init__(self, *, category: Any = None, rule: Rule | None = None,
                 match_subtree: DecisionTree | None = None,
                 not_match_subtree: DecisionTree | None = None):
        if rule is not None and (match_subtree is None or not_match_subtree is None):
            raise ValueError("an internal node needs both a match and a not-match subtree")
        self.rule = rule
        self.category = None if rule is not None else category
        self.match_subtree = match_subtree if rule is not None else None
        self.not_match_subtree = not_match_subtree if rule is not None else None

    @classmethod
    def leaf(cls, category: Any) -> DecisionTree:
        return cls(category=category)

    @classmethod
    def internal(cls, rule: Rule, match_subtree: DecisionTree,
                 not_match_subtree: DecisionTree) -> DecisionTree:
        return cls(rule=rule, match_subtree=match_subtree,
                   not_match_subtree=not_match_subtree)

    @property
    def is_leaf(self) -> bool:
        return self.rule is None

    @property
    def depth(self) -> int:
        if self.is_leaf:
            return 0
        return 1 + max(self.match_subtree.depth, self.not_match_subtree.depth)

    @property
    def n_leaves(self) -> int:
        if self.is_leaf:
            return 1
        return self.match_subtree.n_leaves + self.not_match_subtree.n_leaves

    def walk(self) -> Iterator[DecisionTree]:
        """Yield every node of the subtree in pre-order (match side first)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if not node.is_leaf:
                stack.append(node.not_match_subtree)
                stack.append(node.match_subtree)

    def classify(self, record: Record) -> Any:
        node = self
        while not node.is_leaf:
            node = node.match_subtree if node.rule.match(record) else node.not_match_subtree
        return node.category

    def merge_redundant_rules(self) -> DecisionTree:
        """
        Collapse splits whose two children are leaves predicting the same category.

        Children are merged first, so chains of redundant splits collapse in a
        single call.  Classification results are unchanged for every record,
        and a second call is a no-op.

        Returns
        -------
        DecisionTree
            ``self``, so the call can be chained after induction.
        """
        if self.is_leaf:
            return self
        self.match_subtree.merge_redundant_rules()
        self.not_match_subtree.merge_redundant_rules()

        m, nm = self.match_subtree, self.not_match_subtree
        if m.is_leaf and nm.is_leaf and m.category == nm.category:
            self.category = m.category
            self.rule = None
            self.match_subtree = None
            self.not_match_subtree = None
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecisionTree):
            return NotImplemented
        return (self.rule == other.rule
                and self.category == other.category
                and self.match_subtree == other.match_subtree
                and self.not_match_subtree == other.not_match_subtree)

    __hash__ = None

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"DecisionTree.leaf({self.category!r})"
        return f"DecisionTree.internal({self.rule}, depth={self.depth})"

    # ------------------------------------------------------------------
    # Rule tracing / export / printing
    # ------------------------------------------------------------------
    def trace_rule(self, record: Record) -> str:
        """Return the conjunction of conditions ``record`` satisfies on its way to a leaf."""
        parts: list[str] = []
        node = self
        while not node.is_leaf:
            if node.rule.match(record):
                parts.append(str(node.rule))
                node = node.match_subtree
            else:
                parts.append(node.rule.negated_str())
                node = node.not_match_subtree
        return " AND ".join(parts) if parts else "<root>"

    def export_rules(self) -> list[str]:
        """
        Export every root-to-leaf path as ``"<antecedent> => <category>"``.

        Returns
        -------
        list[str]
            One rule per leaf, match branches listed before not-match branches.
        """
        rules: list[str] = []
        self._collect_rules([], rules)
        return rules

    def _collect_rules(self, parts, rules):
        if self.is_leaf:
            body = " AND ".join(parts) if parts else "<root>"
            rules.append(f"{body} => {self.category}")
            return
        self.match_subtree._collect_rules(parts + [str(self.rule)], rules)
        self.not_match_subtree._collect_rules(parts + [self.rule.negated_str()], rules)

    def print_tree(self, indent: str = "") -> None:
        """Pretty-print the tree to ``stdout`` as nested if/else blocks."""
        if self.is_leaf:
            print(f"{indent}Predict {self.category}")
            return
        print(f"{indent}if {self.rule}:")
        self.match_subtree.print_tree(indent + "  ")
        print(f"{indent}else:")
        self.not_match_subtree.print_tree(indent + "  ")

    def export_graphviz(self, filename: str | None = None, *, format: str = "dot") -> str:
        """
        Export the tree structure in Graphviz format.

        Parameters
        ----------
        filename : str or None, default=None
            Basename of the output file.  If None, the DOT source is returned
            and nothing is written.
        format : str, default="dot"
            ``'dot'`` writes the DOT source directly; any other Graphviz
            format (``'png'``, ``'svg'``...) is rendered with the ``dot``
            executable, falling back to a ``.dot`` file when rendering fails.

        Returns
        -------
        str
            Path to the written file, or the DOT source if filename is None.

        Raises
        ------
        RuntimeError
            If the ``graphviz`` package is not installed.
        """
        try:
            import graphviz
        except ImportError as e:
            raise RuntimeError("Graphviz is required for export_graphviz but not installed.") from e
        dot = graphviz.Digraph(format=format)
        self._add_graph_nodes(dot, "0")

        if filename is None:
            return dot.source
        if format.lower() == "dot":
            path = f"{filename}.dot"
            dot.save(path)
            return path
        try:
            dot.render(filename, cleanup=True)
            return f"{filename}.{format}"
        except graphviz.ExecutableNotFound:
            logger.warning("dot executable not found, writing {}.dot instead", filename)
            fallback_path = f"{filename}.dot"
            dot.save(fallback_path)
            return fallback_path

    def _add_graph_nodes(self, dot, name: str):
        if self.is_leaf:
            dot.node(name, f"class={self.category}", shape="box", style="filled", color="lightgrey")
            return
        dot.node(name, str(self.rule), shape="ellipse", style="filled", color="lightblue")
        l_id, r_id = name + "L", name + "R"
        self.match_subtree._add_graph_nodes(dot, l_id)
        self.not_match_subtree._add_graph_nodes(dot, r_id)
        dot.edge(name, l_id, label="True")
        dot.edge(name, r_id, label="False")


# -----------------------------------------------------------------------------
# Tree construction (information gain)
# -----------------------------------------------------------------------------
def build_decision_tree(items: Sequence[Record],
                        minimal_number_of_items: int = 0,
                        attribute_predicates: Mapping[str, Sequence[Predicate]] | None = None,
                        default_predicates: Sequence[Predicate] | None = None,
                        ignored_attributes=frozenset()) -> DecisionTree:
    """
    Recursively build a decision tree from ``items``.

    A leaf holding the most frequent category is returned when the item set
    is no larger than ``minimal_number_of_items``, when all items share one
    category, or when no rule reduces entropy.  Otherwise the best split is
    found and both partitions are built with the same configuration.

    Parameters
    ----------
    items : sequence of Record
        Training records reaching this node.  Never mutated.
    minimal_number_of_items : int, default=0
        Item sets of this size or smaller become leaves.
    attribute_predicates : mapping, optional
        Attribute name -> predicates tried for that attribute.
    default_predicates : sequence of Predicate, optional
        Predicates for every attribute without its own list.
    ignored_attributes : collection of str
        Attributes excluded from split search.

    Returns
    -------
    DecisionTree
        Root of the induced tree.
    Raises
    ------
    ValueError
        If ``minimal_number_of_items`` is negative.
    """
    if minimal_number_of_items < 0:
        raise ValueError("minimal_number_of_items must be >= 0")
    if len(items) <= minimal_number_of_items:
        return DecisionTree.leaf(most_frequent_category(items))

    if entropy(items) == 0:
        # all categories the same
        return DecisionTree.leaf(items[0].category)

    best = find_best_split(items, attribute_predicates, default_predicates, ignored_attributes)
    if best is None:
        return DecisionTree.leaf(most_frequent_category(items))

    logger.trace("split {} items on {} (gain={:.4f}, {}/{})", len(items), best.rule,
                 best.gain, len(best.matched), len(best.not_matched))

    match_subtree = build_decision_tree(best.matched, minimal_number_of_items,
                                        attribute_predicates, default_predicates,
                                        ignored_attributes)
    not_match_subtree = build_decision_tree(best.not_matched, minimal_number_of_items,
                                            attribute_predicates, default_predicates,
                                            ignored_attributes)
    return DecisionTree.internal(best.rule, match_subtree, not_match_subtree)
