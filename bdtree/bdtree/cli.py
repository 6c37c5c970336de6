"""BDTREE command-line interface."""

from __future__ import annotations

import argparse
import math
import sys
import time
from typing import Sequence

DEFAULT_OUTPUT = "tree.nwk"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def format_duration(seconds: float) -> str:
    """Two-decimal duration with the largest unit that keeps the value >= 1."""
    if seconds >= 1.0:
        return f"{seconds:.2f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.2f}ms"
    if seconds >= 1e-6:
        return f"{seconds * 1e6:.2f}µs"
    return f"{seconds * 1e9:.2f}ns"


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="bdtree",
        description="Simulate a birth-death tree conditioned on the number of extant lineages and write it as Newick.",
    )
    parser.add_argument("birth_rate", help="Per-lineage birth (speciation) rate, >= 0.")
    parser.add_argument("death_rate", help="Per-lineage death (extinction) rate, >= 0.")
    parser.add_argument("n_extant", help="Number of extant lineages, a positive integer.")
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"Output path for the Newick tree. Defaults to {DEFAULT_OUTPUT}.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed. Runs are non-deterministic when omitted.",
    )
    parser.add_argument(
        "--max-events",
        type=int,
        default=None,
        help="Abort the simulation after this many events.",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check the arena structure and re-read the Newick output before writing it.",
    )
    return parser


def _parse_rate(raw: str, name: str) -> float | None:
    try:
        value = float(raw)
    except ValueError:
        print(f"error: {name} must be a floating-point number", file=sys.stderr)
        return None
    if math.isnan(value) or value < 0:
        print(f"error: {name} must be >= 0", file=sys.stderr)
        return None
    return value


def _parse_count(raw: str) -> int | None:
    try:
        value = int(raw)
    except ValueError:
        print("error: n_extant must be a positive integer", file=sys.stderr)
        return None
    if value < 1:
        print("error: n_extant must be a positive integer", file=sys.stderr)
        return None
    return value


def _verify(tree, newick: str, n_extant: int) -> None:
    from .trees import leaf_labels, read_tree
    from .validation import check_arena

    check_arena(tree)
    parsed = read_tree(newick)
    extant = {str(i) for i in range(n_extant)}
    found = extant & set(leaf_labels(parsed))
    if found != extant:
        raise ValueError(f"expected {n_extant} extant leaves in output, found {len(found)}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    birth_rate = _parse_rate(args.birth_rate, "birth_rate")
    if birth_rate is None:
        return 1
    death_rate = _parse_rate(args.death_rate, "death_rate")
    if death_rate is None:
        return 1
    n_extant = _parse_count(args.n_extant)
    if n_extant is None:
        return 1
    if args.max_events is not None and args.max_events < 1:
        print("error: --max-events must be >= 1", file=sys.stderr)
        return 1

    import numpy as np

    from .convert import flat_to_node
    from .errors import MalformedTreeError, SamplerError, SimulationLimitError
    from .newick import tree_to_newick, write_newick
    from .simulate import conditional_bd

    rng = np.random.default_rng(args.seed)
    t0 = time.perf_counter()
    try:
        tree = conditional_bd(birth_rate, death_rate, n_extant, rng=rng, max_events=args.max_events)
    except (SamplerError, SimulationLimitError) as exc:
        print(f"error: simulation failed: {exc}", file=sys.stderr)
        return 1
    try:
        node = flat_to_node(tree.nodes, tree.root)
    except MalformedTreeError as exc:
        print(f"error: node generation from flat tree failed: {exc}", file=sys.stderr)
        return 1
    newick = tree_to_newick(node)
    elapsed = float(time.perf_counter() - t0)

    if args.verify:
        try:
            _verify(tree, newick, n_extant)
        except Exception as exc:  # pragma: no cover - error path
            print(f"error: verification failed: {exc}", file=sys.stderr)
            return 1

    try:
        write_newick(newick, args.output)
    except OSError as exc:
        print(f"error: failed to write to file {args.output}: {exc}", file=sys.stderr)
        return 1

    print(f"Newick string saved to '{args.output}'.")
    print(f"Execution time before writing to disk: {format_duration(elapsed)}")
    return 0
