"""Birth-death tree simulation conditioned on the number of extant lineages."""

from __future__ import annotations

from dataclasses import dataclass
import math
import time

import numpy as np

from .arena import FlatTree
from .errors import SamplerError, SimulationLimitError


@dataclass(frozen=True)
class SimulationResult:
    tree: FlatTree
    n_events: int
    n_fusions: int
    n_extinct: int
    elapsed: float


def _check_inputs(birth_rate: float, death_rate: float, n_extant: int) -> float:
    if isinstance(n_extant, bool) or not isinstance(n_extant, (int, np.integer)) or n_extant < 1:
        raise SamplerError("n_extant must be a positive integer")
    for name, rate in (("birth_rate", birth_rate), ("death_rate", death_rate)):
        if not math.isfinite(rate):
            raise SamplerError(f"{name} must be finite, got {rate}")
        if rate < 0:
            raise SamplerError(f"{name} must be >= 0, got {rate}")
    total_rate = float(birth_rate) + float(death_rate)
    if total_rate <= 0.0:
        raise SamplerError("birth_rate + death_rate must be > 0 to sample waiting times")
    if float(birth_rate) == 0.0:
        raise SamplerError("birth_rate must be > 0 for the process to terminate")
    return total_rate


def _run_events(
    birth_rate: float,
    death_rate: float,
    n_extant: int,
    rng: np.random.Generator,
    max_events: int | None,
) -> tuple[FlatTree, int, int, int]:
    total_rate = _check_inputs(birth_rate, death_rate, n_extant)
    p_birth = float(birth_rate) / total_rate
    scale = 1.0 / total_rate

    n_extant = int(n_extant)
    tree = FlatTree()
    for i in range(n_extant):
        tree.add_node(str(i), depth=0.0)

    alive = list(range(n_extant))
    n = n_extant
    current_time = 0.0
    n_events = n_fusions = n_extinct = 0
    while n > 0:
        if max_events is not None and n_events >= max_events:
            raise SimulationLimitError(f"Exceeded {max_events} events with {n} lineages still alive")
        n_events += 1
        current_time += float(rng.exponential(scale)) / n

        is_birth = float(rng.random()) < p_birth
        if is_birth and n > 1:
            i1 = int(rng.integers(n))
            i2 = int(rng.integers(n - 1))
            if i2 >= i1:
                i2 += 1
            left = alive[i1]
            right = alive[i2]
            # Swap-remove the higher position first so the lower one stays put.
            for pos in sorted((i1, i2), reverse=True):
                alive[pos] = alive[-1]
                alive.pop()

            new_index = len(tree)
            tree.add_node(str(new_index), left_child=left, right_child=right, depth=current_time)
            for child in (left, right):
                node = tree[child]
                node.parent = new_index
                node.length = current_time - node.require_depth()
            alive.append(new_index)
            n_fusions += 1
            n -= 1
        elif is_birth:
            last = tree[alive[0]]
            last.length = current_time - last.require_depth()
            n -= 1
        else:
            new_index = len(tree)
            tree.add_node(str(new_index), depth=current_time)
            alive.append(new_index)
            n_extinct += 1
            n += 1

    tree.root = len(tree) - 1
    root = tree.root_node()
    max_height = root.require_depth() + root.length
    for node in tree:
        node.depth = max_height - node.require_depth()
    return tree, n_events, n_fusions, n_extinct


def conditional_bd(
    birth_rate: float,
    death_rate: float,
    n_extant: int,
    *,
    rng: np.random.Generator | None = None,
    max_events: int | None = None,
) -> FlatTree:
    """Simulate a birth-death tree backward in time from `n_extant` lineages.

    Births fuse two alive lineages into their ancestor; deaths add a new
    lineage that went extinct at the current time. The run stops at the birth
    event that leaves no lineage to fuse with. Depths are returned as
    `max_height - raw time`, where `max_height` is the root's raw time plus
    its own branch length.

    Leaves `0 .. n_extant - 1` are the extant lineages; any further leaves are
    extinct ones.
    """
    if rng is None:
        rng = np.random.default_rng()
    tree, _, _, _ = _run_events(birth_rate, death_rate, n_extant, rng, max_events)
    return tree


def simulate(
    birth_rate: float,
    death_rate: float,
    n_extant: int,
    *,
    seed: int | None = None,
    max_events: int | None = None,
) -> SimulationResult:
    """Seeded, timed run that also reports event counts."""
    rng = np.random.default_rng(seed)
    t0 = time.perf_counter()
    tree, n_events, n_fusions, n_extinct = _run_events(birth_rate, death_rate, n_extant, rng, max_events)
    elapsed = float(time.perf_counter() - t0)
    return SimulationResult(
        tree=tree,
        n_events=n_events,
        n_fusions=n_fusions,
        n_extinct=n_extinct,
        elapsed=elapsed,
    )
