"""Structural checks for simulated arenas and nested trees."""

from __future__ import annotations

from typing import Iterable

import networkx as nx
import numpy as np

from .arena import FlatTree
from .convert import NestedNode
from .errors import MalformedTreeError


def arena_graph(tree: FlatTree) -> nx.DiGraph:
    """Directed parent -> child graph built from the child fields."""
    g = nx.DiGraph()
    g.add_nodes_from(range(len(tree)))
    for i, node in enumerate(tree):
        for child in (node.left_child, node.right_child):
            if child is not None:
                g.add_edge(i, child)
    return g


def check_arena(tree: FlatTree) -> None:
    """Raise `MalformedTreeError` unless the arena is a rooted binary tree.

    Checked: every node has zero or two children, child and parent links
    agree, exactly one node (the root) has no parent, the child relation is an
    arborescence, and no branch length is negative.
    """
    if len(tree) == 0:
        raise MalformedTreeError("Arena is empty")
    if tree.root is None or not 0 <= tree.root < len(tree):
        raise MalformedTreeError(f"Root index {tree.root} out of range for {len(tree)} nodes")

    for i, node in enumerate(tree):
        kids = [c for c in (node.left_child, node.right_child) if c is not None]
        if len(kids) == 1:
            raise MalformedTreeError(f"Node {i} ({node.name!r}) has exactly one child")
        for child in kids:
            if not 0 <= child < len(tree):
                raise MalformedTreeError(f"Node {i} ({node.name!r}) has out-of-range child index {child}")
            if tree[child].parent != i:
                raise MalformedTreeError(
                    f"Node {child} lists parent {tree[child].parent} but is a child of {i}"
                )
        if node.length < 0:
            raise MalformedTreeError(f"Node {i} ({node.name!r}) has negative length {node.length}")

    orphans = [i for i, node in enumerate(tree) if node.parent is None]
    if orphans != [tree.root]:
        raise MalformedTreeError(f"Expected only the root {tree.root} without parent, found {orphans}")

    g = arena_graph(tree)
    if not nx.is_arborescence(g):
        raise MalformedTreeError("Child links do not form a single rooted tree")


def root_to_leaf_distances(node: NestedNode) -> dict[str, float]:
    """Sum of branch lengths from `node` to each leaf, excluding `node`'s own."""
    out: dict[str, float] = {}
    stack = [(node, 0.0)]
    while stack:
        cur, dist = stack.pop()
        if cur.is_leaf():
            out[cur.name] = dist
            continue
        for child in cur.children:
            stack.append((child, dist + float(child.length)))
    return out


def is_ultrametric(node: NestedNode, labels: Iterable[str] | None = None, tol: float = 1e-9) -> bool:
    dists = root_to_leaf_distances(node)
    if labels is not None:
        wanted = set(labels)
        dists = {k: v for k, v in dists.items() if k in wanted}
    if not dists:
        return True
    values = np.fromiter(dists.values(), dtype=float)
    return bool(np.ptp(values) <= tol * max(1.0, float(np.max(np.abs(values)))))
