"""CLI package for the snap command

This package provides the command-line interface for logging in to
SnapMaster and managing the local config. The entry point is
cli.main:main.
"""

from cli.main import build_parser, run

__all__ = [
    "build_parser",
    "run",
]
