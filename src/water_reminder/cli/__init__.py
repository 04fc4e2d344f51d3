"""Command-line control surface for the reminder daemon."""

from .main import main

__all__ = ["main"]
