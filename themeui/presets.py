"""Preset themes with light and dark color modes."""

from __future__ import annotations

from dataclasses import dataclass

from themeui.theme import Theme

BASE_PRESET_NAME = "base"
NORD_PRESET_NAME = "nord"
TOKYONIGHT_PRESET_NAME = "tokyonight"

DEFAULT_PRESET_NAME = BASE_PRESET_NAME


@dataclass(frozen=True)
class ModePalette:
    """Semantic colors for one mode of a preset."""

    text: str
    background: str
    primary: str
    secondary: str
    accent: str
    muted: str
    highlight: str
    success: str
    warning: str
    error: str

    def to_colors(self) -> dict[str, str]:
        """Return the palette as a flat color mapping."""
        return {
            "text": self.text,
            "background": self.background,
            "primary": self.primary,
            "secondary": self.secondary,
            "accent": self.accent,
            "muted": self.muted,
            "highlight": self.highlight,
            "success": self.success,
            "warning": self.warning,
            "error": self.error,
        }


@dataclass(frozen=True)
class Preset:
    """A named preset: a light base palette plus named mode palettes."""

    name: str
    label: str
    light: ModePalette
    modes: tuple[tuple[str, ModePalette], ...]

    def to_theme(self) -> Theme:
        """Build the preset's theme. The base colors describe the ``light`` mode."""
        colors: dict[str, object] = self.light.to_colors()
        colors["modes"] = {name: palette.to_colors() for name, palette in self.modes}
        return Theme(colors=colors, initial_color_mode="light")


PRESETS = (
    Preset(
        name=BASE_PRESET_NAME,
        label="Base",
        light=ModePalette(
            text="#000000",
            background="#ffffff",
            primary="#0066cc",
            secondary="#663399",
            accent="#cc0066",
            muted="#f6f6f6",
            highlight="#ffffcc",
            success="#12c905",
            warning="#fcd53a",
            error="#fc533a",
        ),
        modes=(
            (
                "dark",
                ModePalette(
                    text="#ffffff",
                    background="#0c0c0e",
                    primary="#33aaff",
                    secondary="#9966cc",
                    accent="#ff3399",
                    muted="#191515",
                    highlight="#3a3333",
                    success="#12c905",
                    warning="#fcd53a",
                    error="#fc533a",
                ),
            ),
            (
                "deep",
                ModePalette(
                    text="#c9b6ff",
                    background="#1a102b",
                    primary="#c792ff",
                    secondary="#4d3a73",
                    accent="#ff7ac6",
                    muted="#1f1434",
                    highlight="#352552",
                    success="#7be0b0",
                    warning="#ffd580",
                    error="#ff7ac6",
                ),
            ),
        ),
    ),
    Preset(
        name=NORD_PRESET_NAME,
        label="Nord",
        light=ModePalette(
            text="#2e3440",  # nord0
            background="#eceff4",  # nord6
            primary="#5e81ac",  # nord10
            secondary="#81a1c1",  # nord9
            accent="#88c0d0",  # nord8
            muted="#d8dee9",  # nord4
            highlight="#e5e9f0",  # nord5
            success="#a3be8c",  # nord14
            warning="#ebcb8b",  # nord13
            error="#bf616a",  # nord11
        ),
        modes=(
            (
                "dark",
                ModePalette(
                    text="#e5e9f0",  # nord5
                    background="#2e3440",  # nord0
                    primary="#88c0d0",  # nord8
                    secondary="#81a1c1",  # nord9
                    accent="#88c0d0",  # nord8
                    muted="#3b4252",  # nord1
                    highlight="#434c5e",  # nord2
                    success="#a3be8c",  # nord14
                    warning="#ebcb8b",  # nord13
                    error="#bf616a",  # nord11
                ),
            ),
        ),
    ),
    Preset(
        name=TOKYONIGHT_PRESET_NAME,
        label="Tokyo Night",
        light=ModePalette(
            text="#3760bf",
            background="#e1e2e7",
            primary="#2e7de9",
            secondary="#9854f1",
            accent="#007197",
            muted="#c4c8da",
            highlight="#b7c1e3",
            success="#587539",
            warning="#8c6c3e",
            error="#f52a65",
        ),
        modes=(
            (
                "dark",
                ModePalette(
                    text="#c0caf5",
                    background="#101324",
                    primary="#7aa2f7",
                    secondary="#bb9af7",
                    accent="#7dcfff",
                    muted="#111428",
                    highlight="#3a3e57",
                    success="#9ece6a",
                    warning="#e0af68",
                    error="#f7768e",
                ),
            ),
        ),
    ),
)

PRESET_NAMES: tuple[str, ...] = tuple(preset.name for preset in PRESETS)

PRESET_LABELS: dict[str, str] = {preset.name: preset.label for preset in PRESETS}


def get_preset(name: str) -> Theme:
    """Return the theme of a preset.

    Args:
        name: Preset name.

    Returns:
        A new Theme for the preset.

    Raises:
        KeyError: If no preset has that name.
    """
    for preset in PRESETS:
        if preset.name == name:
            return preset.to_theme()
    raise KeyError(f"Unknown preset: {name!r}")
