"""CLI exports.

This package exposes `cli` and `main` from `root.py` so that
`python -m fileinfo` and the console entry point share one code path.
"""

from .root import cli, main

__all__ = ["cli", "main"]
