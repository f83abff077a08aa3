"""Theme data model."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from themeui.logger import get_logger

logger = get_logger(__name__)

# Reserved key inside ``colors`` holding per-mode overrides
MODES_KEY = "modes"


class ThemeLoadError(ValueError):
    """Raised when a theme file cannot be read or has the wrong shape."""


@dataclass(frozen=True)
class Theme:
    """A theme: a color palette, its modes and a few scalar flags.

    Attributes:
        colors: Color mapping. Values are color strings, nested mappings or
            lists of colors. ``colors["modes"]`` maps mode names to partial
            overrides of the same shape.
        initial_color_mode: Mode used when nothing is stored or preferred.
        use_custom_properties: Whether colors are emitted as CSS variables.
        extras: Every other top-level key, passed through untouched.
    """

    colors: Mapping[str, Any] = field(default_factory=dict)
    initial_color_mode: str | None = None
    use_custom_properties: bool = True
    extras: Mapping[str, Any] = field(default_factory=dict)

    @property
    def modes(self) -> Mapping[str, Any]:
        """Mode name to override mapping, empty when the theme has no modes."""
        modes = self.colors.get(MODES_KEY)
        return modes if isinstance(modes, Mapping) else {}

    def with_colors(self, colors: Mapping[str, Any]) -> Theme:
        """Return a copy of this theme with a different color mapping."""
        return replace(self, colors=colors)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Theme:
        """Create a theme from its JSON-like form, applying defaults for invalid values.

        Args:
            data: Mapping with ``colors``, ``initialColorMode``,
                ``useCustomProperties`` and any collaborator keys.

        Returns:
            A Theme instance.
        """
        colors = data.get("colors")
        if colors is None:
            colors = {}
        elif not isinstance(colors, Mapping):
            logger.warning(f"Ignoring theme colors of type {type(colors).__name__}")
            colors = {}

        initial_color_mode = data.get("initialColorMode")
        if initial_color_mode is not None and not isinstance(initial_color_mode, str):
            logger.warning(f"Ignoring non-string initialColorMode: {initial_color_mode!r}")
            initial_color_mode = None

        use_custom_properties = data.get("useCustomProperties", True)
        if not isinstance(use_custom_properties, bool):
            use_custom_properties = True

        extras = {
            key: value
            for key, value in data.items()
            if key not in ("colors", "initialColorMode", "useCustomProperties")
        }
        return cls(
            colors=colors,
            initial_color_mode=initial_color_mode or None,
            use_custom_properties=use_custom_properties,
            extras=extras,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the theme to its JSON-like form.

        ``initialColorMode`` is omitted when unset so that merging this theme
        over another keeps the other theme's value.
        """
        data: dict[str, Any] = dict(self.extras)
        data["colors"] = self.colors
        if self.initial_color_mode is not None:
            data["initialColorMode"] = self.initial_color_mode
        data["useCustomProperties"] = self.use_custom_properties
        return data


def available_modes(theme: Theme) -> list[str]:
    """List the mode names defined in ``colors.modes``.

    Args:
        theme: Theme to inspect.

    Returns:
        Mode names in definition order.
    """
    return [name for name, override in theme.modes.items() if isinstance(override, Mapping)]


def load_theme(path: Path) -> Theme:
    """Load a theme from a JSON file.

    Args:
        path: Path to the JSON theme file.

    Returns:
        The loaded theme.

    Raises:
        ThemeLoadError: If the file cannot be read or is not a JSON object.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ThemeLoadError(f"Failed to parse theme file {path}: {exc}") from exc
    except OSError as exc:
        raise ThemeLoadError(f"Failed to read theme file {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ThemeLoadError(f"Theme file {path} must contain a JSON object")

    logger.debug(f"Loaded theme from {path}")
    return Theme.from_mapping(raw)
