"""Command line interface."""

from penguinetl.cli.app import app, run

__all__ = ["app", "run"]
