"""Command-line interface for placesync."""

from .main import app

__all__ = ["app"]
