#!/usr/bin/env python3
"""Generate replicate birth-death trees, one Newick string per line."""

from __future__ import annotations

import argparse
from pathlib import Path

from bdtree.convert import flat_to_node
from bdtree.newick import tree_to_newick
from bdtree.simulate import simulate


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--birth-rate", type=float, default=1.0)
    parser.add_argument("--death-rate", type=float, default=0.0)
    parser.add_argument("--n-extant", type=int, default=20)
    parser.add_argument("--replicates", type=int, default=100)
    parser.add_argument("--seed", type=int, default=0, help="Replicate i uses seed + i.")
    parser.add_argument("--max-events", type=int, default=None)
    parser.add_argument("--output", required=True, help="Output Newick file path.")
    args = parser.parse_args()

    if args.replicates < 1:
        raise ValueError("--replicates must be >= 1")

    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as handle:
        for i in range(args.replicates):
            result = simulate(
                args.birth_rate,
                args.death_rate,
                args.n_extant,
                seed=args.seed + i,
                max_events=args.max_events,
            )
            node = flat_to_node(result.tree.nodes, result.tree.root)
            handle.write(tree_to_newick(node) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
