"""provcode command-line interface."""

from provcode.cli.app import app, run

__all__ = ["app", "run"]
