"""Newick rendering of nested trees."""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

import numpy as np

from .convert import NestedNode


def format_length(length: float) -> str:
    """Shortest round-tripping decimal, never in exponent notation."""
    return np.format_float_positional(float(length), trim="-")


def _label(node: NestedNode) -> str:
    return f"{node.name}:{format_length(node.length)}"


def node_to_newick(node: NestedNode) -> str:
    """Render `node` as `name:length` or `(left,right)name:length`.

    Children are written in stored order. No terminating `;` is added.
    """
    parts: List[str] = []
    stack: List[Union[NestedNode, str]] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        if item.is_leaf():
            parts.append(_label(item))
            continue
        if len(item.children) != 2:
            raise ValueError(f"Node {item.name!r} has {len(item.children)} children; expected 0 or 2")
        left, right = item.children
        parts.append("(")
        stack.append(")" + _label(item))
        stack.append(right)
        stack.append(",")
        stack.append(left)
    return "".join(parts)


def tree_to_newick(node: NestedNode) -> str:
    return node_to_newick(node) + ";"


def write_newick(newick: str, path: Union[str, Path]) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(newick.rstrip() + "\n")
