# src/ddp/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from canonicalizer.model import CanonicalizeOptions, MinifyOptions, PrettyPrintOptions
from ddp.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    A singleton holding the tool's settings.
    Settings are read from settings.json; reset() reads them again.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value, e.g. 'session.concurrency'.
        """
        value = self._config
        for key in key_path.split('.'):
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def reset(self):
        """Reloads the configuration from settings.json."""
        config_path = PathUtils.get_settings_file()
        try:
            if not config_path.exists():
                logger.warning("settings.json not found at %s. Using empty config.", config_path)
                self._config = {}
                return
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.debug("Configuration has been (re)loaded from %s.", config_path)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}

    def canonicalize_options(self, **overrides: Any) -> CanonicalizeOptions:
        """Builds the engine options from the 'canonicalizer' section."""
        section = self.get_nested("canonicalizer", {}) or {}
        options = CanonicalizeOptions(
            reorder_head_tags=bool(section.get("reorder_head_tags", False)),
            tidy_on_bad_html=bool(section.get("tidy_on_bad_html", False)),
            minify=MinifyOptions(**(section.get("minify") or {})),
            pretty_print=PrettyPrintOptions(**(section.get("pretty_print") or {})),
        )
        return options.model_copy(update=overrides) if overrides else options


# The global singleton instance used by the whole tool.
config_manager = ConfigManager()
