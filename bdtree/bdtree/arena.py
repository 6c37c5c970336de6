"""Append-only, index-addressed node storage used while a tree is built."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .errors import ArenaInvariantError


@dataclass
class ArenaNode:
    name: str
    left_child: Optional[int] = None
    right_child: Optional[int] = None
    parent: Optional[int] = None
    depth: Optional[float] = None
    length: float = 0.0

    def is_leaf(self) -> bool:
        return self.left_child is None and self.right_child is None

    def require_depth(self) -> float:
        if self.depth is None:
            raise ArenaInvariantError(f"Depth not set for node {self.name!r}")
        return self.depth


@dataclass
class FlatTree:
    """Nodes reference each other by list position only.

    Indices returned by `add_node` stay valid for the lifetime of the tree:
    nodes are appended, never removed or moved. No referential checks happen
    here; `flat_to_node` and `check_arena` do that at the boundary.
    """

    nodes: List[ArenaNode] = field(default_factory=list)
    root: Optional[int] = None

    def add_node(
        self,
        name: str,
        left_child: Optional[int] = None,
        right_child: Optional[int] = None,
        parent: Optional[int] = None,
        depth: Optional[float] = None,
        length: float = 0.0,
    ) -> int:
        self.nodes.append(
            ArenaNode(
                name=name,
                left_child=left_child,
                right_child=right_child,
                parent=parent,
                depth=depth,
                length=length,
            )
        )
        return len(self.nodes) - 1

    def root_node(self) -> ArenaNode:
        if self.root is None:
            raise ArenaInvariantError("Root not set")
        return self.nodes[self.root]

    def __getitem__(self, index: int) -> ArenaNode:
        return self.nodes[index]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[ArenaNode]:
        return iter(self.nodes)
