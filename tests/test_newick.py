"""Tests for Newick rendering."""

from __future__ import annotations

import re

import numpy as np

from bdtree.convert import NestedNode, flat_to_node
from bdtree.newick import format_length, node_to_newick, tree_to_newick, write_newick
from bdtree.simulate import conditional_bd
from bdtree.trees import read_tree

NEWICK_TOKEN = re.compile(r"^[^(),:;]+:[0-9]+(\.[0-9]+)?$")


def _leaf(name: str, length: float) -> NestedNode:
    return NestedNode(name=name, length=length)


def test_leaf_rendering():
    assert node_to_newick(_leaf("A", 0.5)) == "A:0.5"


def test_internal_rendering_keeps_child_order():
    left = NestedNode(name="AB", length=1.0, children=[_leaf("A", 0.25), _leaf("B", 0.75)])
    root = NestedNode(name="R", length=0.0, children=[left, _leaf("C", 2.0)])
    assert node_to_newick(root) == "((A:0.25,B:0.75)AB:1,C:2)R:0"

    swapped = NestedNode(name="R", length=0.0, children=[_leaf("C", 2.0), left])
    assert node_to_newick(swapped) == "(C:2,(A:0.25,B:0.75)AB:1)R:0"


def test_empty_internal_name():
    root = NestedNode(name="", length=1.5, children=[_leaf("A", 1.0), _leaf("B", 1.0)])
    assert tree_to_newick(root) == "(A:1,B:1):1.5;"


def test_format_length_is_positional():
    assert format_length(0.0) == "0"
    assert format_length(1.0) == "1"
    assert format_length(1e-5) == "0.00001"
    assert "e" not in format_length(1.2345e-12)
    assert float(format_length(0.1 + 0.2)) == 0.1 + 0.2


def test_single_leaf_tree():
    assert tree_to_newick(_leaf("0", 0.75)) == "0:0.75;"


def test_simulated_tree_tokens_match_grammar():
    tree = conditional_bd(1.0, 0.3, 30, rng=np.random.default_rng(9))
    newick = tree_to_newick(flat_to_node(tree.nodes, tree.root))
    assert newick.endswith(";")
    assert newick.count("(") == newick.count(")")
    tokens = [t for t in re.split(r"[(),;]", newick) if t]
    assert all(NEWICK_TOKEN.match(t) for t in tokens)
    assert newick.count(",") == newick.count("(")


def test_pure_birth_three_taxa_round_trip():
    tree = conditional_bd(1.0, 0.0, 3, rng=np.random.default_rng(7))
    node = flat_to_node(tree.nodes, tree.root)
    newick = tree_to_newick(node)

    parsed = read_tree(newick)
    nodes = list(parsed.traverse_preorder())
    assert len(nodes) == 5
    leaves = sorted(str(n.label) for n in parsed.traverse_leaves())
    assert leaves == ["0", "1", "2"]
    internal = [n for n in nodes if not n.is_leaf()]
    assert len(internal) == 2
    assert all(len(n.children) == 2 for n in internal)
    assert str(parsed.root.label) == "4"

    by_label = {str(n.label): n for n in nodes}
    for src in node.traverse_preorder():
        if src is node:
            continue
        assert by_label[src.name].edge_length == src.length


def test_write_newick(tmp_path):
    out = tmp_path / "tree.nwk"
    write_newick("(A:1,B:1)C:0;", out)
    text = out.read_text(encoding="utf-8")
    assert text == "(A:1,B:1)C:0;\n"
    assert len(text.splitlines()) == 1


def test_deep_tree_serializes_iteratively():
    node = _leaf("L0", 1.0)
    for i in range(1, 3000):
        node = NestedNode(name=f"I{i}", length=1.0, children=[node, _leaf(f"L{i}", 1.0)])
    newick = tree_to_newick(node)
    assert newick.startswith("(" * 2999 + "L0:1,L1:1)I1:1")
    assert newick.endswith(")I2999:1;")


def test_simulated_single_lineage_renders_as_bare_leaf():
    tree = conditional_bd(1.0, 0.0, 1, rng=np.random.default_rng(0))
    newick = tree_to_newick(flat_to_node(tree.nodes, tree.root))
    assert re.match(r"^0:[0-9.]+;$", newick)
