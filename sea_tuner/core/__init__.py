"""Core components for the SeaTuner application."""

from .config import ConfigManager
from .events import TunerEvents, TunerEventType

__all__ = ["ConfigManager", "TunerEvents", "TunerEventType"]
