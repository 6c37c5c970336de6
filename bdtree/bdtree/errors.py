"""Exception types raised by the simulation and conversion layers."""

from __future__ import annotations


class BDTreeError(Exception):
    """Base class for bdtree errors."""


class SamplerError(BDTreeError, ValueError):
    """Rates or target lineage count cannot define a waiting-time sampler."""


class SimulationLimitError(BDTreeError, RuntimeError):
    """The event loop ran past its configured bound."""


class ArenaInvariantError(BDTreeError, RuntimeError):
    """A field required by the algorithm is missing from an arena node."""


class MalformedTreeError(BDTreeError, ValueError):
    """Arena contents do not describe a rooted binary tree."""
