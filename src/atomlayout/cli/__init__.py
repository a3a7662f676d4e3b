"""CLI package for atomlayout.

This package provides a small command-line interface using Typer, for
inspecting the layouts the atom produces.
"""

from atomlayout.cli.app import app, console

__all__ = ["app", "console"]
