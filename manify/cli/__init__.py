"""manify command-line interface."""

from manify.cli.main import app, main

__all__ = ["app", "main"]
