"""Command-line interface."""

from singularis.cli.main import cli_entrypoint, main

__all__ = ["cli_entrypoint", "main"]
