"""Projection of resolved colors onto CSS custom properties.

With custom properties enabled, every color value in the theme handed to the
style pipeline becomes ``var(--theme-ui-colors-<path>,<literal>)``. The raw
literals are returned alongside, keyed by variable name, for consumers that
need to compute with the actual color.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from themeui.colors import is_color_list
from themeui.logger import get_logger
from themeui.theme import MODES_KEY, Theme

logger = get_logger(__name__)

NAMESPACE = "theme-ui"

_UNSAFE_NAME_CHARS = re.compile(r"[^a-z0-9_-]+")


@dataclass(frozen=True)
class Projection:
    """Result of applying custom properties to an effective theme.

    Attributes:
        theme: Theme whose colors are CSS variable references (or the input
            theme when projection is disabled).
        css_var_values: Variable name to raw resolved color.
    """

    theme: Theme
    css_var_values: dict[str, str] = field(default_factory=dict)


def to_name_token(value: str) -> str:
    """Lower-case a name and replace characters not valid in CSS identifiers with dashes."""
    return _UNSAFE_NAME_CHARS.sub("-", value.lower())


def to_var_name(path: tuple[str, ...] | list[str], namespace: str = NAMESPACE) -> str:
    """Build the custom property name for a color path.

    Args:
        path: Path segments, e.g. ``("header", "title")``.
        namespace: Prefix token.

    Returns:
        The property name, e.g. ``--theme-ui-colors-header-title``.
    """
    segments = [to_name_token(segment) for segment in path]
    return f"--{namespace}-colors-{'-'.join(segments)}"


def to_custom_property(name: str, fallback: str) -> str:
    """Render a variable reference with a literal fallback."""
    return f"var({name},{fallback})"


def apply_custom_properties(effective_theme: Theme, enabled: bool, namespace: str = NAMESPACE) -> Projection:
    """Rewrite an effective theme's colors as CSS variable references.

    Args:
        effective_theme: Theme with the active mode already merged in.
        enabled: Whether to project at all.
        namespace: Prefix token for variable names.

    Returns:
        The projected theme and the raw values keyed by variable name.
    """
    if not enabled:
        return Projection(theme=effective_theme)

    css_var_values: dict[str, str] = {}
    projected: dict[str, Any] = {}
    for key, value in effective_theme.colors.items():
        if key == MODES_KEY:
            # Metadata, not paintable
            projected[key] = value
        else:
            projected[key] = _project(value, (str(key),), namespace, css_var_values)
    return Projection(theme=effective_theme.with_colors(projected), css_var_values=css_var_values)


def _project(node: Any, path: tuple[str, ...], namespace: str, values: dict[str, str]) -> Any:
    if isinstance(node, str):
        name = to_var_name(path, namespace)
        if name in values:
            logger.warning(f"Color {'.'.join(path)!r} reuses custom property {name}, replacing {values[name]!r}")
        values[name] = node
        return to_custom_property(name, node)
    if isinstance(node, Mapping):
        return {key: _project(value, (*path, str(key)), namespace, values) for key, value in node.items()}
    if is_color_list(node):
        return [_project(value, (*path, str(index)), namespace, values) for index, value in enumerate(node)]
    return node
