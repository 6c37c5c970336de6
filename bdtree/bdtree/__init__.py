"""BDTREE package."""

__all__ = [
    "arena",
    "simulate",
    "convert",
    "newick",
    "trees",
    "validation",
    "errors",
    "cli",
]
