"""Command-line interface."""

from mst.cli.main import main

__all__ = ["main"]
