"""CLI package for dirscan.

This package contains the Typer application and its display helpers.
"""

from dirscan.cli.main import app, run

__all__ = ["app", "run"]
