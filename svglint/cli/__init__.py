"""svglint command line interface."""

from svglint.cli.main import app, main

__all__ = ["app", "main"]
