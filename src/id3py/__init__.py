# id3py/__init__.py
"""
id3py: ID3 decision trees over categorical data in pure Python.

Exports:
    - ID3Classifier
    - Dataset, load_dataset
    - compute_entropy, choose_best_split, construct, build_tree
    - render_tree, print_tree
"""
from .dataset import CAR_ATTRIBUTES, LABEL, Dataset, load_dataset
from .exceptions import (EmptyDistributionError, Id3Error, InputUnavailableError,
                         NotFittedError, SchemaViolationError)
from .export import export_rules, print_tree, render_tree
from .node import Internal, Leaf, TreeNode, majority_labels
from .tree import ID3Classifier, build_tree, choose_best_split, compute_entropy, construct

__all__ = [
    "ID3Classifier",
    "Dataset", "load_dataset", "CAR_ATTRIBUTES", "LABEL",
    "TreeNode", "Leaf", "Internal", "majority_labels",
    "compute_entropy", "choose_best_split", "construct", "build_tree",
    "render_tree", "print_tree", "export_rules",
    "Id3Error", "InputUnavailableError", "SchemaViolationError",
    "EmptyDistributionError", "NotFittedError",
]
__version__ = "0.1.0"
