"""Command-line interface for typstable."""

from .commands import main

__all__ = ["main"]
