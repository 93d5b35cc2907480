"""Command line interface for Life History."""

from lifehistory.cli.main import cli

__all__ = ["cli"]
