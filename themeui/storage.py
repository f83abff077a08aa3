"""Durable storage for the active color mode.

The mode lives under a single fixed key in a key-value store that outlives
any provider scope. Two stores are provided: an in-memory one (tests,
embedding) and a JSON file in the config directory (the default).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from themeui.logger import get_logger

logger = get_logger(__name__)

STORAGE_KEY = "theme-ui-color-mode"


class ModeStorage(Protocol):
    """Read/write access to the persisted color mode."""

    def get(self) -> str | None:
        """Return the stored mode, or None when nothing usable is stored."""
        ...

    def set(self, value: str) -> None:
        """Store a mode, overwriting any previous value."""
        ...


class MemoryModeStorage:
    """Process-local key-value store.

    Several instances may share one backing dict to emulate a store shared by
    the whole browsing context.
    """

    def __init__(self, data: dict[str, str] | None = None, key: str = STORAGE_KEY) -> None:
        """Initialize the store.

        Args:
            data: Optional backing dictionary (shared if passed in).
            key: Key the mode is stored under.
        """
        self.data: dict[str, str] = data if data is not None else {}
        self.key = key

    def get(self) -> str | None:
        """Return the stored mode, or None when the key is absent or empty."""
        value = self.data.get(self.key)
        return value if isinstance(value, str) and value else None

    def set(self, value: str) -> None:
        """Store a mode.

        Args:
            value: Mode name to store.
        """
        self.data[self.key] = value


class FileModeStorage:
    """Key-value store backed by a JSON object on disk.

    Other keys in the file are preserved on write.
    """

    def __init__(self, path: Path, key: str = STORAGE_KEY) -> None:
        """Initialize the store.

        Args:
            path: Path of the JSON file.
            key: Key the mode is stored under.
        """
        self.path = path
        self.key = key

    def _read(self) -> dict[str, object]:
        """Read the whole file, treating a missing or unreadable file as empty."""
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            logger.warning(f"Failed to parse color mode store {self.path}: {exc}")
            return {}
        except OSError as exc:
            logger.warning(f"Failed to read color mode store {self.path}: {exc}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Color mode store {self.path} contains invalid data")
            return {}
        return raw

    def get(self) -> str | None:
        """Return the stored mode, or None when the key is absent or empty."""
        value = self._read().get(self.key)
        return value if isinstance(value, str) and value else None

    def set(self, value: str) -> None:
        """Store a mode.

        Args:
            value: Mode name to store.
        """
        data = self._read()
        data[self.key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning(f"Failed to save color mode to {self.path}: {exc}")
            return
        logger.debug(f"Stored color mode {value!r} in {self.path}")
