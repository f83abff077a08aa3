"""Shared test fixtures for themeui."""

from pathlib import Path

import pytest

from themeui.diagnostics import DiagnosticCollector
from themeui.preference import StaticPreference
from themeui.storage import MemoryModeStorage
from themeui.theme import Theme


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temp dir and pin the color preference.

    Returns:
        Path to the temporary config directory.
    """
    config_dir = tmp_path / "config"
    monkeypatch.setenv("THEMEUI_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("THEMEUI_COLOR_SCHEME", "light")
    monkeypatch.delenv("COLORFGBG", raising=False)
    return config_dir


@pytest.fixture
def storage() -> MemoryModeStorage:
    """Empty in-memory color mode store."""
    return MemoryModeStorage()


@pytest.fixture
def no_dark_preference() -> StaticPreference:
    """Preference detector reporting no dark preference."""
    return StaticPreference(dark=False)


@pytest.fixture
def collector() -> DiagnosticCollector:
    """Diagnostic sink that records events."""
    return DiagnosticCollector()


@pytest.fixture
def moded_theme() -> Theme:
    """Theme with a base palette and a dark mode override."""
    return Theme.from_mapping(
        {
            "colors": {
                "text": "#000",
                "background": "#fff",
                "header": {"title": "blue", "subtitle": "navy"},
                "modes": {
                    "dark": {
                        "text": "#fff",
                        "background": "#000",
                        "header": {"title": "tomato"},
                    },
                },
            },
        }
    )
