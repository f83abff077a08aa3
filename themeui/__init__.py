"""Color modes for themed UI component trees."""

from themeui.colors import compute_effective_theme, deep_merge, get_color
from themeui.custom_properties import Projection, apply_custom_properties
from themeui.diagnostics import Diagnostic, DiagnosticCollector
from themeui.preference import StaticPreference, SystemPreference
from themeui.provider import ColorModeUsageError, ThemeContext, ThemeProvider, use_color_mode, use_theme_ui
from themeui.resolver import resolve_initial_mode
from themeui.scope import Scope
from themeui.storage import STORAGE_KEY, FileModeStorage, MemoryModeStorage
from themeui.stylesheet import render_color_mode_css
from themeui.theme import Theme, load_theme

__all__ = [
    "STORAGE_KEY",
    "ColorModeUsageError",
    "Diagnostic",
    "DiagnosticCollector",
    "FileModeStorage",
    "MemoryModeStorage",
    "Projection",
    "Scope",
    "StaticPreference",
    "SystemPreference",
    "Theme",
    "ThemeContext",
    "ThemeProvider",
    "apply_custom_properties",
    "compute_effective_theme",
    "deep_merge",
    "get_color",
    "load_theme",
    "render_color_mode_css",
    "resolve_initial_mode",
    "use_color_mode",
    "use_theme_ui",
]
