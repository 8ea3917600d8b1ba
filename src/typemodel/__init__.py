"""Typemodel - intermediate type model extraction from Java sources."""

from .cli import cli


def main() -> None:
    """Entry point for the CLI application."""
    cli()
