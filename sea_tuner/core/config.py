"""Configuration management for SeaTuner components."""

from typing import Dict, Any, Optional
import json
from pathlib import Path

from ..logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIGS: Dict[str, Dict[str, Any]] = {
    "tuner": {
        "window_size": 1200,
        "cycle_delay": 0.01,
        "half_range": 128,
        "trough_ratio": 0.1,
    },
    "audio_input": {
        "device_id": None,
        "sample_rate": 44100,
    },
}


class ConfigManager:
    """Tuner settings kept as one JSON file per section of ``DEFAULT_CONFIGS``."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory holding the section files, or None for
                ~/.config/sea_tuner
        """
        if config_dir is None:
            self.config_dir = Path.home() / ".config" / "sea_tuner"
        else:
            self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.configs = {section: self.load_config(section) for section in DEFAULT_CONFIGS}

    def _path(self, section: str) -> Path:
        return self.config_dir / f"{section}.json"

    def load_config(self, section: str) -> Dict[str, Any]:
        """Read a section from disk, writing the defaults if it has no file yet.

        Keys missing from the file take their default value. A file that
        cannot be read or parsed is logged and the defaults are used.
        """
        defaults = DEFAULT_CONFIGS[section]
        config_file = self._path(section)

        if not config_file.exists():
            config = dict(defaults)
            self.save_config(section, config)
            return config

        try:
            stored = json.loads(config_file.read_text())
            if not isinstance(stored, dict):
                raise ValueError("top-level value is not an object")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration from {config_file}: {e}")
            return dict(defaults)

        logger.info(f"Loaded configuration from {config_file}")
        return {**defaults, **stored}

    def save_config(self, section: str, config: Dict[str, Any]) -> bool:
        """Write a section to its JSON file.

        Returns:
            True if saved successfully, False otherwise
        """
        config_file = self._path(section)
        try:
            config_file.write_text(json.dumps(config, indent=2))
        except OSError as e:
            logger.error(f"Error saving configuration to {config_file}: {e}")
            return False

        logger.info(f"Saved configuration to {config_file}")
        return True

    def get_config(self, section: str) -> Dict[str, Any]:
        """Get a copy of a section (empty if unknown)."""
        return dict(self.configs.get(section, {}))

    def settings(self, **overrides: Any) -> Dict[str, Any]:
        """All sections flattened into one mapping for building the tuner.

        Overrides that are None are ignored, so unset command line flags
        leave the stored values in place.
        """
        merged: Dict[str, Any] = {}
        for section in DEFAULT_CONFIGS:
            merged.update(self.configs[section])
        merged.update({key: value for key, value in overrides.items() if value is not None})
        return merged

    def update_config(self, section: str, updates: Dict[str, Any]) -> bool:
        """Change some keys of a section and save it.

        Returns:
            False if the section or one of the keys is unknown, or saving failed
        """
        if section not in self.configs:
            logger.error(f"Unknown configuration: {section}")
            return False

        unknown = set(updates) - set(DEFAULT_CONFIGS[section])
        if unknown:
            logger.error(f"Unknown {section} settings: {', '.join(sorted(unknown))}")
            return False

        self.configs[section].update(updates)
        return self.save_config(section, self.configs[section])

    def reset_config(self, section: str) -> bool:
        """Restore a section to its defaults and save it."""
        if section not in DEFAULT_CONFIGS:
            logger.error(f"Unknown configuration: {section}")
            return False

        self.configs[section] = dict(DEFAULT_CONFIGS[section])
        return self.save_config(section, self.configs[section])
