# -*- coding: utf-8 -*-
"""
id3py.node
==========

Tree data structures.  A :class:`TreeNode` names the attribute it splits on
and owns one edge per distinct value of that attribute.  Edges are a tagged
variant: a :class:`Leaf` stores the label distribution of the rows reaching
it, an :class:`Internal` edge additionally leads to a child node grown from
exactly those rows.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Iterator, Mapping, Union


@dataclass(frozen=True)
class Leaf:
    """Terminal edge; resolved to the majority label(s) of ``distribution``."""
    value: Hashable
    distribution: Counter


@dataclass(frozen=True)
class Internal:
    """Edge leading to the subtree grown from the rows matching ``value``."""
    value: Hashable
    distribution: Counter
    child: "TreeNode"


Edge = Union[Leaf, Internal]


@dataclass(frozen=True)
class TreeNode:
    """Split on ``attribute`` with one edge per distinct value.

    Attributes
    ----------
    attribute : str
        Name of the split attribute.
    edges : tuple of Edge
        One edge per distinct value of ``attribute`` in the node's rows, in
        order of first appearance.
    distribution : Counter
        Label counts over all rows reaching the node.
    """
    attribute: str
    edges: tuple
    distribution: Counter

    def leaves(self) -> Iterator[Leaf]:
        """Yield every leaf edge below this node, depth first."""
        for edge in self.edges:
            if isinstance(edge, Internal):
                yield from edge.child.leaves()
            else:
                yield edge

    def depth(self) -> int:
        """Number of split levels in the subtree rooted here."""
        return 1 + max((e.child.depth() for e in self.edges if isinstance(e, Internal)),
                       default=0)


def majority_labels(distribution: Mapping[Hashable, int]) -> list:
    """
    Labels sharing the highest count, in the order they appear in
    ``distribution``.

    Ties are not broken: every tied label is returned.

    Raises
    ------
    ValueError
        If ``distribution`` is empty.
    """
    if not distribution:
        raise ValueError("cannot take the majority of an empty distribution")
    top = max(distribution.values())
    return [label for label, count in distribution.items() if count == top]
