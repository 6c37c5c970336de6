#!/usr/bin/env python3
"""Time simulation, conversion and serialization over tree sizes; emit JSON summary."""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

import numpy as np

from bdtree.convert import flat_to_node
from bdtree.newick import tree_to_newick
from bdtree.simulate import simulate


def _bench_size(
    n_extant: int,
    birth_rate: float,
    death_rate: float,
    replicates: int,
    seed: int,
) -> dict:
    sim_t, conv_t, ser_t, events, nodes = [], [], [], [], []
    for i in range(replicates):
        result = simulate(birth_rate, death_rate, n_extant, seed=seed + i)
        sim_t.append(result.elapsed)
        events.append(result.n_events)
        nodes.append(len(result.tree))

        t0 = time.perf_counter()
        node = flat_to_node(result.tree.nodes, result.tree.root)
        conv_t.append(float(time.perf_counter() - t0))

        t0 = time.perf_counter()
        tree_to_newick(node)
        ser_t.append(float(time.perf_counter() - t0))
    return {
        "n_extant": int(n_extant),
        "mean_simulate_seconds": float(np.mean(sim_t)),
        "mean_convert_seconds": float(np.mean(conv_t)),
        "mean_serialize_seconds": float(np.mean(ser_t)),
        "mean_events": float(np.mean(events)),
        "mean_nodes": float(np.mean(nodes)),
    }


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--sizes",
        default="100,1000,10000",
        help="Comma-separated n_extant values to benchmark.",
    )
    parser.add_argument("--birth-rate", type=float, default=1.0)
    parser.add_argument("--death-rate", type=float, default=0.5)
    parser.add_argument("--replicates", type=int, default=3)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--output", default=None, help="Optional JSON output path.")
    args = parser.parse_args()

    if args.replicates < 1:
        raise ValueError("--replicates must be >= 1")
    sizes = [int(x.strip()) for x in str(args.sizes).split(",") if x.strip()]

    payload = {
        "birth_rate": float(args.birth_rate),
        "death_rate": float(args.death_rate),
        "replicates": int(args.replicates),
        "seed": int(args.seed),
        "results": [
            _bench_size(n, args.birth_rate, args.death_rate, args.replicates, args.seed) for n in sizes
        ],
    }
    text = json.dumps(payload, indent=2)
    print(text)
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
