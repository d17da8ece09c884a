"""Command-line interface for infragraph."""

from infragraph.cli.main import main

__all__ = ["main"]
