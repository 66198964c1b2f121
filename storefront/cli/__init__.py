"""Command line entrypoints."""

from .admin import app

__all__ = ["app"]
