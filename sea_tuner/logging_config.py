"""Centralized logging configuration for SeaTuner.

Every module obtains its logger through ``sea_tuner.logger.get_logger``;
this module decides where the records go and how loud each module is.
"""

import logging
import sys
from typing import Optional

# Log levels for different modules
MODULE_LOG_LEVELS = {
    # Core modules
    "sea_tuner": logging.INFO,
    "sea_tuner.tuner_loop": logging.INFO,
    # Analysis pipeline, set to DEBUG to trace every cycle
    "sea_tuner.audio": logging.INFO,
    "sea_tuner.detection": logging.INFO,
    "sea_tuner.services": logging.INFO,
    "sea_tuner.note_matcher": logging.INFO,
    "sea_tuner.core": logging.INFO,
    "sea_tuner.cli": logging.INFO,
    "sea_tuner.ui": logging.WARNING,  # Redrawn every frame, keep quiet
    "sea_tuner.logger": logging.WARNING,
    # Root logger
    "": logging.ERROR,
}


class _StdoutHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stdout`` is when a record is emitted."""

    def __init__(self) -> None:
        super().__init__(sys.stdout)

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value) -> None:
        pass


# Shared console handler
_console_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        level: If provided, override all 'sea_tuner' log levels with this level (e.g., "DEBUG").
    """
    global _console_handler

    # Create a single, shared console handler if it doesn't exist
    if _console_handler is None:
        _console_handler = _StdoutHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _console_handler.setFormatter(formatter)

    log_levels = MODULE_LOG_LEVELS.copy()
    if level:
        numeric_level = logging.getLevelName(level.upper())
        if isinstance(numeric_level, int):
            for module_name in log_levels:
                if module_name.startswith("sea_tuner"):
                    log_levels[module_name] = numeric_level
        else:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")

    for module_name, module_level in log_levels.items():
        logger = logging.getLogger(module_name)
        logger.setLevel(module_level)

        # Only the package root and the root logger emit; children propagate
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        if module_name in ("", "sea_tuner"):
            logger.addHandler(_console_handler)
            logger.propagate = False

    logging.getLogger("sea_tuner").debug("Logging configuration complete")
