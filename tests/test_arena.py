"""Tests for the append-only node arena."""

from __future__ import annotations

import pytest

from bdtree.arena import FlatTree
from bdtree.errors import ArenaInvariantError


def test_add_node_returns_increasing_indices():
    tree = FlatTree()
    assert tree.add_node("a", depth=0.0) == 0
    assert tree.add_node("b", depth=0.0) == 1
    assert tree.add_node("c", left_child=0, right_child=1, depth=1.0) == 2
    assert len(tree) == 3
    assert [n.name for n in tree] == ["a", "b", "c"]


def test_in_place_mutation_keeps_indices():
    tree = FlatTree()
    a = tree.add_node("a", depth=0.0)
    b = tree.add_node("b", depth=0.0)
    p = tree.add_node("p", left_child=a, right_child=b, depth=2.0)
    tree[a].parent = p
    tree[a].length = 2.0
    tree.add_node("x", depth=3.0)
    assert tree[a].parent == p
    assert tree[a].length == 2.0
    assert tree[p].left_child == a and tree[p].right_child == b
    assert tree[p].length == 0.0


def test_add_node_does_not_validate_indices():
    tree = FlatTree()
    idx = tree.add_node("dangling", left_child=7, right_child=9)
    assert tree[idx].left_child == 7
    assert not tree[idx].is_leaf()


def test_require_depth_fails_loudly():
    tree = FlatTree()
    idx = tree.add_node("nodepth")
    with pytest.raises(ArenaInvariantError):
        tree[idx].require_depth()


def test_root_node_requires_root():
    tree = FlatTree()
    tree.add_node("a", depth=0.0)
    with pytest.raises(ArenaInvariantError):
        tree.root_node()
    tree.root = 0
    assert tree.root_node().name == "a"
