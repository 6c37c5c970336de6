"""treeswift interop: reading Newick back and exporting nested trees."""

from __future__ import annotations

import io
from typing import List

import treeswift

from .convert import NestedNode


def read_tree(newick: str) -> treeswift.Tree:
    if hasattr(treeswift, "read_tree_newick"):
        return treeswift.read_tree_newick(newick)
    return treeswift.read_tree(io.StringIO(newick), "newick")


def to_treeswift(node: NestedNode) -> treeswift.Tree:
    """Copy a nested tree into treeswift nodes, keeping labels and lengths."""
    tree = treeswift.Tree()
    root = treeswift.Node(label=node.name, edge_length=float(node.length))
    tree.root = root
    stack = [(node, root)]
    while stack:
        src, dst = stack.pop()
        for child in src.children:
            out = treeswift.Node(label=child.name, edge_length=float(child.length))
            dst.add_child(out)
            stack.append((child, out))
    return tree


def leaf_labels(tree: treeswift.Tree) -> List[str]:
    return [str(n.label) for n in tree.traverse_leaves()]
