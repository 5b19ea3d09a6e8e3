# -*- coding: utf-8 -*-
"""
id3py.export
============

Renderers for fitted trees: the tab-indented text tree, flat rule lists and
Graphviz diagrams.

The text layout is depth-first pre-order with one tab per level (shown here
as ``>``)::

    safety
     | safety = low -->
    >unacc
     | safety = high -->
    >persons
    > | persons = 2 -->
    >>unacc

Leaves print their majority label; when several labels share the highest
count all of them are printed, joined by ``/``, in the order they were first
met in the training rows.
"""

from __future__ import annotations

from typing import Hashable, Mapping

from .node import Internal, TreeNode, majority_labels

INDENT = "\t"


# -----------------------------------------------------------------------------
# Text tree
# -----------------------------------------------------------------------------
def render_leaf(distribution: Mapping[Hashable, int], depth: int) -> str:
    return INDENT * depth + "/".join(map(str, majority_labels(distribution))) + "\n"


def _render_node(node: TreeNode, depth: int, out: list):
    pad = INDENT * depth
    out.append(f"{pad}{node.attribute}\n")
    for edge in node.edges:
        out.append(f"{pad} | {node.attribute} = {edge.value} --> \n")
        if isinstance(edge, Internal):
            _render_node(edge.child, depth + 1, out)
        else:
            out.append(render_leaf(edge.distribution, depth + 1))


def render_tree(node: TreeNode, depth: int = 0) -> str:
    """Render ``node`` and its subtree, starting at indentation ``depth``."""
    out: list[str] = []
    _render_node(node, depth, out)
    return "".join(out)


def print_tree(depth: int, node: TreeNode, file=None):
    """Write :func:`render_tree` output to ``stdout`` (or ``file``)."""
    print(render_tree(node, depth), end="", file=file)


# -----------------------------------------------------------------------------
# Rules
# -----------------------------------------------------------------------------
def _collect_rules(node: TreeNode, parts, rules):
    for edge in node.edges:
        cond = parts + [f"{node.attribute} = {edge.value}"]
        if isinstance(edge, Internal):
            _collect_rules(edge.child, cond, rules)
        else:
            pred = "/".join(map(str, majority_labels(edge.distribution)))
            rules.append(f"{' AND '.join(cond)} => {pred}")


def export_rules(node: TreeNode) -> list[str]:
    """
    Flatten the tree into one rule per leaf, in print order.

    Each rule is the conjunction of the edge conditions from the root to the
    leaf followed by ``=>`` and the leaf's majority label(s).
    """
    rules: list[str] = []
    _collect_rules(node, [], rules)
    return rules


# -----------------------------------------------------------------------------
# Graphviz
# -----------------------------------------------------------------------------
def _add_leaf(dot, name: str, distribution):
    pred = "/".join(map(str, majority_labels(distribution)))
    dot.node(name, f"{pred}\n{dict(distribution)}",
             shape="box", style="filled", color="lightgrey")


def _add_graph_nodes(dot, node: TreeNode, name: str):
    dot.node(name, node.attribute, shape="ellipse", style="filled", color="lightblue")
    for i, edge in enumerate(node.edges):
        child_id = f"{name}_{i}"
        if isinstance(edge, Internal):
            _add_graph_nodes(dot, edge.child, child_id)
        else:
            _add_leaf(dot, child_id, edge.distribution)
        dot.edge(name, child_id, label=str(edge.value))


def export_graphviz(node: TreeNode | None, filename=None, format="dot", distribution=None):
    """
    Build a Graphviz diagram of the tree.

    Parameters
    ----------
    node : TreeNode or None
        Root of the tree.  ``None`` draws a single leaf from ``distribution``.
    filename : str or None, default=None
        Output path without extension.  When ``None`` the dot source is
        returned instead of being written.
    format : str, default="dot"
        ``"dot"`` writes the source only; any other format is rendered with
        the Graphviz binaries, falling back to a dot file if they fail.
    distribution : mapping, optional
        Label counts of the root; required when ``node`` is ``None``.

    Returns
    -------
    str
        The dot source, or the path of the written file.

    Raises
    ------
    RuntimeError
        If the ``graphviz`` package is not installed.
    """
    try:
        import graphviz
    except ImportError:
        raise RuntimeError("Graphviz is required for export_graphviz but not installed.")
    dot = graphviz.Digraph(format=format)
    if node is None:
        if not distribution:
            raise ValueError("distribution is required to draw a tree without splits")
        _add_leaf(dot, "0", distribution)
    else:
        _add_graph_nodes(dot, node, "0")

    if filename is None:
        return dot.source

    # A dot file needs no Graphviz binary: save the source and return.
    if format.lower() == "dot":
        path = f"{filename}.dot"
        dot.save(path)
        return path
    try:
        dot.render(filename, cleanup=True)
        return f"{filename}.{format}"
    except graphviz.ExecutableNotFound:
        fallback_path = f"{filename}.dot"
        dot.save(fallback_path)
        return fallback_path
