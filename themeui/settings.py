"""Persistent settings for themeui."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from themeui.logger import get_logger
from themeui.presets import DEFAULT_PRESET_NAME, PRESET_NAMES

logger = get_logger(__name__)

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_STORAGE_FILE = "storage.json"


@dataclass(frozen=True)
class Settings:
    """User-configurable settings stored on disk."""

    preset: str = DEFAULT_PRESET_NAME
    log_level: str = "WARNING"
    # Whether the OS/terminal dark preference takes part in initial mode resolution
    follow_system_preference: bool = True
    # File name (inside the config dir) of the key-value store holding the color mode
    storage_file: str = DEFAULT_STORAGE_FILE

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> Settings:
        """Create settings from a mapping, applying defaults for invalid values.

        Args:
            data: Mapping containing raw settings values.

        Returns:
            A Settings instance with validated values.
        """
        preset_value = _coerce_str(data.get("preset"))
        preset = preset_value if preset_value is not None and preset_value in PRESET_NAMES else DEFAULT_PRESET_NAME

        log_level_value = _coerce_str(data.get("log_level"))
        log_level = log_level_value if log_level_value is not None and log_level_value in LOG_LEVELS else "WARNING"

        follow_system_preference = _coerce_bool(data.get("follow_system_preference"))
        if follow_system_preference is None:
            follow_system_preference = True

        storage_file = _coerce_str(data.get("storage_file"))
        if not storage_file or Path(storage_file).name != storage_file:
            # Only bare file names are allowed; the store always lives in the config dir
            storage_file = DEFAULT_STORAGE_FILE

        return cls(
            preset=preset,
            log_level=log_level,
            follow_system_preference=follow_system_preference,
            storage_file=storage_file,
        )

    def to_dict(self) -> dict[str, object]:
        """Serialize settings to a dictionary.

        Returns:
            Dictionary representation of settings.
        """
        return {
            "preset": self.preset,
            "log_level": self.log_level,
            "follow_system_preference": self.follow_system_preference,
            "storage_file": self.storage_file,
        }

    def get_storage_path(self) -> Path:
        """Get the path of the color mode store for these settings.

        Returns:
            Path to the storage JSON file.
        """
        return get_config_dir() / self.storage_file


def get_config_dir() -> Path:
    """Get the directory used for persistent configuration.

    Returns:
        Path to the configuration directory.
    """
    override_dir = os.environ.get("THEMEUI_CONFIG_DIR")
    if override_dir:
        return Path(override_dir).expanduser()

    base_dir = os.environ.get("XDG_CONFIG_HOME")
    if base_dir:
        return Path(base_dir).expanduser() / "themeui"

    return Path.home() / ".config" / "themeui"


def get_settings_path() -> Path:
    """Get the full path to the settings file.

    Returns:
        Path to the settings JSON file.
    """
    return get_config_dir() / "settings.json"


def load_settings() -> Settings:
    """Load settings from disk.

    Returns:
        Loaded settings, or defaults if none exist.
    """
    settings_path = get_settings_path()
    if not settings_path.exists():
        return Settings()

    try:
        raw = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning(f"Failed to parse settings file {settings_path}: {exc}")
        return Settings()
    except OSError as exc:
        logger.warning(f"Failed to read settings file {settings_path}: {exc}")
        return Settings()

    if not isinstance(raw, dict):
        logger.warning(f"Settings file {settings_path} contains invalid data")
        return Settings()

    return Settings.from_mapping(raw)


def save_settings(settings: Settings) -> None:
    """Persist settings to disk.

    Args:
        settings: Settings to persist.
    """
    settings_path = get_settings_path()
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        settings_path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    except OSError as exc:
        logger.warning(f"Failed to save settings to {settings_path}: {exc}")


def _coerce_str(value: object) -> str | None:
    """Coerce a value into a string if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        String value or None.
    """
    if isinstance(value, str):
        return value
    return None


def _coerce_bool(value: object) -> bool | None:
    """Coerce a value into a boolean if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        Boolean value or None.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.lower() in ("true", "1", "yes"):
            return True
        if value.lower() in ("false", "0", "no"):
            return False
    return None
