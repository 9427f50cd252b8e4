"""Command-line interface for transit directions."""

from .main import cli

__all__ = ["cli"]
