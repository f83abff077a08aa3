"""Conversion of effective themes into Textual themes.

The preview app renders in a terminal, where Textual owns styling. Each
color mode becomes one registered Textual theme.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from textual.color import Color
from textual.theme import Theme as TextualTheme

from themeui.colors import get_color, iter_color_paths
from themeui.custom_properties import NAMESPACE, to_var_name
from themeui.theme import Theme

# Fallback colors when a theme does not define a semantic key (or not as hex)
FALLBACK_COLORS = {
    "primary": "#88c0d0",
    "secondary": "#81a1c1",
    "accent": "#88c0d0",
    "success": "#a3be8c",
    "warning": "#ebcb8b",
    "error": "#bf616a",
    "text": "#e5e9f0",
    "background": "#2e3440",
    "muted": "#3b4252",
}

# Textual theme field -> theme color key
_SEMANTIC_KEYS = {
    "primary": "primary",
    "secondary": "secondary",
    "accent": "accent",
    "warning": "warning",
    "error": "error",
    "success": "success",
    "foreground": "text",
    "background": "background",
    "surface": "muted",
    "panel": "muted",
}


def textual_theme_name(mode: str | None, prefix: str = NAMESPACE) -> str:
    """Name under which a mode's Textual theme is registered."""
    return f"{prefix}-{mode}" if mode else f"{prefix}-base"


def is_hex_color(value: str) -> bool:
    """Check if a string is a hex color.

    Args:
        value: Value to check.

    Returns:
        True if value is a hex color string.
    """
    return value.startswith("#") and len(value) in {4, 7}


def _semantic_color(colors: Mapping[str, Any], key: str) -> str:
    value = get_color(colors, key)
    if value is not None and is_hex_color(value):
        return value
    return FALLBACK_COLORS[key]


def to_textual_theme(effective_theme: Theme, name: str) -> TextualTheme:
    """Build a Textual Theme from an effective theme.

    Args:
        effective_theme: Theme with the mode to show already merged in.
        name: Name of the Textual theme.

    Returns:
        A Textual Theme instance.
    """
    colors = effective_theme.colors
    fields = {field_name: _semantic_color(colors, key) for field_name, key in _SEMANTIC_KEYS.items()}
    dark = Color.parse(fields["background"]).brightness < 0.5  # noqa: PLR2004

    # Every hex color stays reachable from Textual CSS as $theme-ui-colors-<path>
    variables = {
        to_var_name(path).removeprefix("--"): value for path, value in iter_color_paths(colors) if is_hex_color(value)
    }

    return TextualTheme(
        name=name,
        dark=dark,
        variables=variables,
        **fields,
    )
