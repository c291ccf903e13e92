# src/blockscope/utils/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from blockscope.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Process-wide settings of blockscope, loaded from the packaged settings.json.

    Sections read by the engine:
        debug.level        default level for configure_logger()
        dom.*              geometry attribute names used by DOMBuilder
        matching.*         MatchSettings thresholds and the detect_blocks progress bar
        selectors.*        match limits of the positional selector strategies

    Values can be overridden in memory with set_nested() and restored with reset().
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Loads the configuration from the file."""
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the loaded settings, including in-memory overrides."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Looks up a dotted key such as 'matching.min_score'.
        Returns `default` when any part of the path is missing, so callers
        always pass the built-in default of the setting they read.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Overrides a dotted key in memory, e.g. ('matching.min_score', 40).
        A value replacing an existing one is cast to that value's type, so
        overrides given as strings keep numeric thresholds numeric.
        """
        keys = key_path.split('.')
        d = self._config
        # Navigate to the second-to-last dictionary
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        # Cast to the type of the value being replaced
        original_value = d.get(keys[-1])
        if original_value is not None:
            try:
                value = type(original_value)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast new value for '%s' to type %s. Storing as given.",
                    key_path, type(original_value).__name__
                )

        d[keys[-1]] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def reset(self):
        """Drops all overrides and reloads settings.json; a missing or broken file leaves no settings."""
        config_path = PathUtils.get_settings_path()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using built-in defaults.", config_path)
            self._config = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.debug("Configuration has been (re)loaded from settings.json.")
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}


# Shared by the DOM builder, the matcher and the selector synthesizer.
config_manager = ConfigManager()
