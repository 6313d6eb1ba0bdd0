"""User settings for the editor.

Settings live in a JSON file in the OS-appropriate config directory
(``platformdirs``), or in ``$LINEEDIT_CONFIG_DIR`` when that is set. A
missing file means defaults; a broken file or a bad value is logged and
replaced by the default.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = f"{EditorConstants.ENV_PREFIX}CONFIG_DIR"
SETTINGS_FILENAME = "settings.json"
ASCII_PROBE = "\n ~"


@dataclass(frozen=True)
class Settings:
    """Editor settings."""
    initial_capacity: int = EditorConstants.INITIAL_CAPACITY
    encoding: str = EditorConstants.DEFAULT_ENCODING
    atomic_save: bool = True


def validate_setting(key: str, value: Any) -> bool:
    """Return True if ``value`` is acceptable for setting ``key``."""
    if key == 'initial_capacity':
        # bool is an int subclass; reject it explicitly
        return isinstance(value, int) and not isinstance(value, bool) and value >= 1
    if key == 'encoding':
        if not isinstance(value, str):
            return False
        # The buffer stores one byte per column, so newline and printable
        # ASCII must encode to themselves
        try:
            return ASCII_PROBE.encode(value) == ASCII_PROBE.encode("ascii")
        except (LookupError, UnicodeError):
            return False
    if key == 'atomic_save':
        return isinstance(value, bool)
    return False


class SettingsStore:
    """Loads ``Settings`` from the user's config directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            override = os.environ.get(CONFIG_DIR_ENV)
            if override:
                config_dir = Path(override)
            else:
                config_dir = Path(platformdirs.user_config_dir("lineedit"))
        self._config_dir = config_dir
        self._settings_file = self._config_dir / SETTINGS_FILENAME

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _read_raw(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> Settings:
        """Read the settings file, falling back to defaults per key."""
        raw = self._read_raw()
        known = {f.name for f in fields(Settings)}
        values: Dict[str, Any] = {}
        for key, value in raw.items():
            if key not in known:
                logger.warning(f"Unknown setting {key!r} ignored")
                continue
            if not validate_setting(key, value):
                logger.warning(f"Invalid value {value!r} for setting {key!r}, using default")
                continue
            values[key] = value
        return Settings(**values)


def load_settings() -> Settings:
    """Load settings from the default location."""
    return SettingsStore().load()
