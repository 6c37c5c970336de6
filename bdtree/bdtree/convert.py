"""Conversion from the flat arena into a nested, owned tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from .arena import ArenaNode
from .errors import MalformedTreeError


@dataclass
class NestedNode:
    name: str
    length: float = 0.0
    depth: Optional[float] = None
    index: Optional[int] = None
    children: List["NestedNode"] = field(default_factory=list)

    def is_leaf(self) -> bool:
        return not self.children

    def traverse_preorder(self) -> Iterator["NestedNode"]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> List["NestedNode"]:
        return [node for node in self.traverse_preorder() if node.is_leaf()]


def _child_indices(nodes: Sequence[ArenaNode], index: int) -> tuple[int, ...]:
    node = nodes[index]
    left, right = node.left_child, node.right_child
    if left is None and right is None:
        return ()
    if left is None or right is None:
        raise MalformedTreeError(f"Node {index} ({node.name!r}) has exactly one child")
    for child in (left, right):
        if not 0 <= child < len(nodes):
            raise MalformedTreeError(f"Node {index} ({node.name!r}) has out-of-range child index {child}")
    return (left, right)


def flat_to_node(nodes: Sequence[ArenaNode], root: Optional[int]) -> NestedNode:
    """Resolve arena indices below `root` into a nested tree.

    The arena is not trusted: bounds, child symmetry and repeated visits
    (cycles or shared subtrees) are checked before anything is built.
    """
    if root is None or not 0 <= root < len(nodes):
        raise MalformedTreeError(f"Root index {root} out of range for {len(nodes)} nodes")

    order: List[int] = []
    children_of: dict[int, tuple[int, ...]] = {}
    seen: set[int] = set()
    stack = [root]
    while stack:
        index = stack.pop()
        if index in seen:
            raise MalformedTreeError(f"Node {index} reached more than once; arena contains a cycle or shared child")
        seen.add(index)
        order.append(index)
        kids = _child_indices(nodes, index)
        children_of[index] = kids
        stack.extend(kids)

    # Reverse preorder visits every child before its parent.
    built: dict[int, NestedNode] = {}
    for index in reversed(order):
        src = nodes[index]
        built[index] = NestedNode(
            name=src.name,
            length=float(src.length),
            depth=src.depth,
            index=index,
            children=[built.pop(child) for child in children_of[index]],
        )
    return built[root]
