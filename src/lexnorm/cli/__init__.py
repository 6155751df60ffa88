"""Command-line interface for lexnorm."""

from .main import app

__all__ = ["app"]
