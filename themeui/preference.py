"""Detection of the environment's "prefers dark" signal.

The signal is only read when a root scope resolves its initial mode; later
changes to the OS setting are not tracked.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from typing import Protocol

from themeui.logger import get_logger

logger = get_logger(__name__)

# Explicit override, e.g. THEMEUI_COLOR_SCHEME=dark
COLOR_SCHEME_ENV = "THEMEUI_COLOR_SCHEME"

# COLORFGBG background indices considered dark (standard ANSI palette, minus light grey)
_DARK_BACKGROUND_INDICES = frozenset({0, 1, 2, 3, 4, 5, 6, 8})

_MACOS_TIMEOUT_SECONDS = 2.0


class PreferenceDetector(Protocol):
    """Source of the "prefers dark color presentation" signal."""

    def prefers_dark(self) -> bool:
        """Return True when a dark presentation is preferred."""
        ...


class StaticPreference:
    """Detector that always reports the same answer."""

    def __init__(self, dark: bool = False) -> None:
        """Initialize the detector.

        Args:
            dark: Value reported by prefers_dark().
        """
        self.dark = dark

    def prefers_dark(self) -> bool:
        """Return the configured answer."""
        return self.dark


class SystemPreference:
    """Detector reading the environment, the terminal and the platform.

    Checks, in order: the THEMEUI_COLOR_SCHEME override, the terminal's
    COLORFGBG variable, then the platform appearance setting. Anything that
    cannot be determined reports False.
    """

    def prefers_dark(self) -> bool:
        """Return True when the environment asks for a dark presentation."""
        for probe in (_from_override, _from_colorfgbg, _from_platform):
            result = probe()
            if result is not None:
                logger.debug(f"Dark preference from {probe.__name__}: {result}")
                return result
        return False


def _from_override() -> bool | None:
    """Read the explicit THEMEUI_COLOR_SCHEME override."""
    value = os.environ.get(COLOR_SCHEME_ENV, "").strip().lower()
    if value == "dark":
        return True
    if value == "light":
        return False
    return None


def _from_colorfgbg() -> bool | None:
    """Read the terminal background from COLORFGBG ("fg;bg" or "fg;default;bg")."""
    value = os.environ.get("COLORFGBG")
    if not value:
        return None
    background = value.split(";")[-1]
    try:
        index = int(background)
    except ValueError:
        return None
    return index in _DARK_BACKGROUND_INDICES


def _from_platform() -> bool | None:
    """Read the platform appearance setting."""
    if sys.platform.startswith("win"):
        return _from_windows_registry()
    if sys.platform == "darwin":
        return _from_macos_defaults()
    return None


def _from_windows_registry() -> bool | None:
    """Read AppsUseLightTheme from the Windows registry."""
    try:
        import winreg  # type: ignore[import-not-found]

        key_path = r"Software\Microsoft\Windows\CurrentVersion\Themes\Personalize"
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, key_path) as key:  # type: ignore[attr-defined]
            # 0 = dark, 1 = light
            value, _ = winreg.QueryValueEx(key, "AppsUseLightTheme")  # type: ignore[attr-defined]
    except (ImportError, OSError) as exc:
        logger.debug(f"Windows appearance setting unavailable: {exc}")
        return None
    return int(value) == 0


def _from_macos_defaults() -> bool | None:
    """Read AppleInterfaceStyle via the defaults tool."""
    defaults = shutil.which("defaults")
    if defaults is None:
        return None
    try:
        result = subprocess.run(  # noqa: S603
            [defaults, "read", "-g", "AppleInterfaceStyle"],
            capture_output=True,
            text=True,
            timeout=_MACOS_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug(f"macOS appearance setting unavailable: {exc}")
        return None
    # The key is absent (non-zero exit) in light mode
    return result.returncode == 0 and result.stdout.strip().lower() == "dark"
