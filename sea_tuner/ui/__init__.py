"""Displays that present tuner results."""

from .console import ConsoleDisplay

__all__ = ["ConsoleDisplay"]
