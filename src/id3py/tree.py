# -*- coding: utf-8 -*-
"""
id3py.tree
==========

This module implements Quinlan's ID3 decision tree for purely categorical
predictors.  Splits are chosen by information gain; every attribute is used
at most once along any root-to-leaf path and the tree is grown until no
attribute reduces the label entropy any further.  There is no pruning.

Besides the free functions that make up the algorithm (``compute_entropy``,
``choose_best_split``, ``construct`` and ``build_tree``) the module provides
``ID3Classifier``, a scikit-learn–like wrapper offering ``fit``/``predict``
together with text, rule and Graphviz exports of the fitted tree.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Hashable, Mapping

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, ClassifierMixin

from .dataset import LABEL, Dataset
from .exceptions import EmptyDistributionError, NotFittedError, SchemaViolationError
from .export import export_graphviz, export_rules, render_leaf, render_tree
from .node import Internal, Leaf, TreeNode, majority_labels

logger = logging.getLogger(__name__)

# Gains within this distance of each other (or of zero) are treated as equal.
_GAIN_TOL = 1e-12


# -----------------------------------------------------------------------------
# Entropy and information gain
# -----------------------------------------------------------------------------
def compute_entropy(label_counts: Mapping[Hashable, int]) -> float:
    """
    Shannon entropy (in bits) of a label count distribution.

    Parameters
    ----------
    label_counts : mapping
        Label to number of records carrying it.  Zero counts contribute
        nothing.

    Returns
    -------
    float
        ``sum(-p * log2(p))`` over the labels with a positive count.  Zero
        when a single label is present, ``log2(k)`` for ``k`` equally
        frequent labels.

    Raises
    ------
    EmptyDistributionError
        If the counts do not add up to a positive total.
    """
    counts = np.fromiter(label_counts.values(), dtype=float, count=len(label_counts))
    if (counts < 0).any():
        raise EmptyDistributionError(f"negative label count in {dict(label_counts)}")
    tot = counts.sum()
    if tot <= 0:
        raise EmptyDistributionError("entropy of an empty label distribution is undefined")
    p = counts / tot
    p = p[p > 0]
    h = float(-np.sum(p * np.log2(p)))
    return h if h > 0 else 0.0


def information_gain(dataset: Dataset, attribute: str,
                     base_entropy: float | None = None) -> float:
    """Entropy reduction obtained by partitioning ``dataset`` on ``attribute``."""
    if base_entropy is None:
        base_entropy = compute_entropy(dataset.label_counts())
    n = dataset.n_rows
    post_split = 0.0
    for value in dataset.distinct(attribute):
        counts = dataset.label_counts(attribute, value)
        post_split += sum(counts.values()) / n * compute_entropy(counts)
    return base_entropy - post_split


# -----------------------------------------------------------------------------
# Tree construction
# -----------------------------------------------------------------------------
def choose_best_split(dataset: Dataset) -> TreeNode | None:
    """
    Pick the attribute with the highest information gain and build its node.

    Attributes are scanned in the dataset's canonical order and a later
    attribute only wins with a strictly greater gain, so ties go to the
    attribute listed first.

    Returns
    -------
    TreeNode or None
        A node splitting on the winner whose edges are all :class:`Leaf`
        instances carrying the label counts of the matching rows, or ``None``
        if the dataset is empty or no attribute yields a positive gain.
    """
    if dataset.is_empty:
        return None
    base = compute_entropy(dataset.label_counts())
    best_attr, best_gain = None, 0.0
    for attribute in dataset.attributes:
        gain = information_gain(dataset, attribute, base)
        if gain > best_gain + _GAIN_TOL:
            best_attr, best_gain = attribute, gain
    if best_attr is None:
        logger.debug("no informative split over %d rows (entropy=%.4f)", dataset.n_rows, base)
        return None

    logger.debug("split on %r over %d rows (gain=%.4f)", best_attr, dataset.n_rows, best_gain)
    edges = tuple(Leaf(value, dataset.label_counts(best_attr, value))
                  for value in dataset.distinct(best_attr))
    return TreeNode(best_attr, edges, dataset.label_counts())


def construct(node: TreeNode | None, dataset: Dataset) -> TreeNode | None:
    """
    Recursively grow the subtrees below ``node``.

    For every edge the rows matching the edge value are selected, the split
    attribute is removed from them and a child is chosen with
    :func:`choose_best_split`.  Edges whose rows admit no useful split stay
    leaves.

    Parameters
    ----------
    node : TreeNode or None
        Node produced by :func:`choose_best_split` for ``dataset``.
    dataset : Dataset
        Rows reaching ``node``.

    Returns
    -------
    TreeNode or None
        A new node with its subtree in place, or ``node`` itself when there is
        nothing left to expand.
    """
    if node is None or dataset.is_empty or not dataset.attributes:
        return node
    edges = []
    for edge in node.edges:
        sub = dataset.partition(node.attribute, edge.value)
        child = construct(choose_best_split(sub), sub)
        if child is None:
            edges.append(edge)
        else:
            edges.append(Internal(edge.value, edge.distribution, child))
    return replace(node, edges=tuple(edges))


def build_tree(dataset: Dataset) -> TreeNode | None:
    """Grow a full ID3 tree; ``None`` if the root itself admits no split."""
    return construct(choose_best_split(dataset), dataset)


# -----------------------------------------------------------------------------
# Classifier
# -----------------------------------------------------------------------------
class ID3Classifier(ClassifierMixin, BaseEstimator):
    """
    Categorical decision tree classifier using Quinlan's ID3.

    Every feature is treated as categorical and compared by equality.  The
    tree is grown without depth limits or pruning; the recursion depth is
    bounded by the number of features.

    Parameters
    ----------
    feature_names : list[str] or None, default=None
        Names of the input columns.  When ``None`` the names are taken from a
        DataFrame passed to ``fit`` or default to ``f0, f1, ...``.
    label_name : str, default="label"
        Name of the label column in the internal dataset.  Must not collide
        with a feature name.
    verbose : int, default=0
        Verbosity during ``fit``.  ``1`` logs the fit summary at INFO, ``2``
        or more also logs every split decision at DEBUG.  ``0`` leaves the
        logger configuration untouched.

    Attributes
    ----------
    tree_ : TreeNode or None
        Root of the fitted tree; ``None`` when no feature is informative and
        the whole training set forms a single leaf.
    distribution_ : Counter
        Label counts over the training set.
    classes_ : ndarray
        Sorted distinct labels.
    feature_names_ : list[str]
        Names of the features, in column order.

    Notes
    -----
    Leaves predict the first of their majority labels (first in order of
    appearance in the training rows).  A value never seen at a node during
    training falls back to the majority of that node.
    """

    def __init__(self, *, feature_names: list[str] | None = None, label_name: str = LABEL,
                 verbose: int = 0):
        self.feature_names = feature_names
        self.label_name = label_name
        self.verbose = int(verbose)

        self.tree_ = None
        self.distribution_ = None
        self.classes_ = None
        self.n_features_ = None

    def fit(self, X, y, feature_names=None):
        names = feature_names if feature_names is not None else self.feature_names
        if names is None and isinstance(X, pd.DataFrame):
            names = [str(c) for c in X.columns]
        X = np.asarray(X, dtype=object)
        y = np.asarray(y, dtype=object)
        if X.ndim != 2:
            raise ValueError("X must be a 2-D array of categorical values")
        if len(X) != len(y):
            raise SchemaViolationError(f"X has {len(X)} rows but y has {len(y)} labels")
        n_features = X.shape[1]
        if names is None:
            names = [f"f{i}" for i in range(n_features)]
        if len(names) != n_features:
            raise ValueError("feature_names length must match X.shape[1]")
        if self.label_name in names:
            raise SchemaViolationError(f"feature name {self.label_name!r} clashes with the label")

        columns = {name: X[:, i] for i, name in enumerate(names)}
        columns[self.label_name] = y
        return self.fit_dataset(Dataset(columns, label=self.label_name))

    def fit_dataset(self, dataset: Dataset):
        """Fit directly from a :class:`Dataset`."""
        if dataset.is_empty:
            raise SchemaViolationError("cannot fit on an empty dataset")
        if self.verbose <= 0:
            return self._fit(dataset)
        previous = logger.level
        logger.setLevel(logging.INFO if self.verbose == 1 else logging.DEBUG)
        try:
            return self._fit(dataset)
        finally:
            logger.setLevel(previous)

    def _fit(self, dataset: Dataset):
        distribution = dataset.label_counts()
        try:
            classes = sorted(distribution)
        except TypeError as exc:
            raise SchemaViolationError(f"labels of mixed types cannot be ordered: {exc}") from exc
        self.feature_names_ = list(dataset.attributes)
        self.n_features_ = len(self.feature_names_)
        self._feature_index = {name: i for i, name in enumerate(self.feature_names_)}
        self.distribution_ = distribution
        self.classes_ = np.array(classes, dtype=object)
        self.tree_ = build_tree(dataset)
        if self.tree_ is None:
            logger.info("fitted %d rows: no informative attribute, single leaf", len(dataset))
        else:
            logger.info("fitted %d rows: root %r, depth %d, %d leaves", len(dataset),
                        self.tree_.attribute, self.tree_.depth(),
                        sum(1 for _ in self.tree_.leaves()))
        return self

    def _check_fitted(self):
        if getattr(self, "distribution_", None) is None:
            raise NotFittedError("Estimator not fitted. Call fit(...) first.")

    def _as_rows(self, X) -> np.ndarray:
        if isinstance(X, pd.DataFrame):
            X = X[self.feature_names_]
        X = np.asarray(X, dtype=object)
        if X.ndim != 2 or X.shape[1] != self.n_features_:
            raise ValueError(f"X must have {self.n_features_} columns")
        return X

    def predict(self, X):
        """
        Predict class labels for the provided samples.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Categorical input samples, columns ordered like ``feature_names_``
            (a DataFrame is reordered by column name).

        Returns
        -------
        ndarray of shape (n_samples,)
            Predicted class labels.

        Raises
        ------
        NotFittedError
            If the estimator has not been fitted.
        """
        self._check_fitted()
        X = self._as_rows(X)
        return np.array([majority_labels(self._distribution_for(x, self.tree_))[0] for x in X],
                        dtype=object)

    def predict_proba(self, X):
        """
        Class probabilities given by the label distribution reached by each
        sample, columns ordered like ``classes_``.
        """
        self._check_fitted()
        X = self._as_rows(X)
        out = np.zeros((len(X), len(self.classes_)), dtype=float)
        for i, x in enumerate(X):
            dist = self._distribution_for(x, self.tree_)
            tot = sum(dist.values())
            out[i] = [dist.get(c, 0) / tot for c in self.classes_]
        return out

    def _distribution_for(self, x, node: TreeNode | None):
        if node is None:
            return self.distribution_
        val = x[self._feature_index[node.attribute]]
        for edge in node.edges:
            if edge.value == val:
                if isinstance(edge, Internal):
                    return self._distribution_for(x, edge.child)
                return edge.distribution
        return node.distribution

    # ------------------------------------------------------------------
    # Exports
    # ------------------------------------------------------------------
    def export_text(self) -> str:
        """Return the tab-indented rendering of the fitted tree."""
        self._check_fitted()
        if self.tree_ is None:
            return render_leaf(self.distribution_, 0)
        return render_tree(self.tree_)

    def print_tree(self, file=None):
        """
        Print the fitted tree to ``stdout`` (or ``file``).

        Each node prints its attribute name, each edge a
        ``" | attribute = value --> "`` line and each leaf its majority label,
        with tied labels joined by ``/``.  Nesting is shown with one tab per
        level.
        """
        print(self.export_text(), end="", file=file)

    def export_rules(self) -> list[str]:
        """One ``"a = v AND b = w => label"`` string per leaf."""
        self._check_fitted()
        if self.tree_ is None:
            return [f"<root> => {'/'.join(map(str, majority_labels(self.distribution_)))}"]
        return export_rules(self.tree_)

    def export_graphviz(self, filename=None, format="dot"):
        """
        Export the fitted tree with Graphviz.

        Returns the dot source when ``filename`` is ``None``; otherwise the
        path of the written file.  Requires the optional ``graphviz``
        package.
        """
        self._check_fitted()
        return export_graphviz(self.tree_, filename=filename, format=format,
                               distribution=self.distribution_)
