"""Color lookup and mode merging.

Colors are always stored as nested mappings. A dot-path such as
``"header.title"`` is only a way of addressing ``{"header": {"title": ...}}``
at lookup time; it is never a storage form of its own.

Usage:
    from themeui.colors import compute_effective_theme, get_color

    effective = compute_effective_theme(theme, "dark")
    title = get_color(effective.colors, "header.title")
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from themeui.theme import MODES_KEY, Theme


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` onto a copy of ``base``.

    Nested mappings present on both sides are merged recursively. Any other
    override value (string, list, number) replaces the base value entirely.
    Neither input is mutated.

    Args:
        base: Base mapping.
        override: Mapping whose values take precedence.

    Returns:
        A new merged dictionary.
    """
    merged = {key: copy.deepcopy(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def compute_effective_theme(theme: Theme, mode: str | None) -> Theme:
    """Merge the overrides of ``mode`` onto the theme's base colors.

    Args:
        theme: Base theme.
        mode: Active mode name, or None when no mode is established.

    Returns:
        The theme itself when there is nothing to merge, otherwise a new
        theme whose colors carry the mode's overrides.
    """
    if mode is None:
        return theme
    override = theme.modes.get(mode)
    if not isinstance(override, Mapping):
        return theme
    override = {key: value for key, value in override.items() if key != MODES_KEY}
    return theme.with_colors(deep_merge(theme.colors, override))


def paintable_colors(colors: Mapping[str, Any]) -> dict[str, Any]:
    """Return the colors without the ``modes`` metadata key."""
    return {key: value for key, value in colors.items() if key != MODES_KEY}


def split_path(path: str) -> list[str]:
    """Split a dot-path into its segments, ignoring empty ones."""
    return [segment for segment in path.split(".") if segment]


def get_color(colors: Mapping[str, Any], path: str, default: str | None = None) -> str | None:
    """Look up a color by key or dot-path.

    List segments are addressed by index (``"gray.2"``). Anything that does
    not end on a string, including the ``modes`` metadata, is "no color".

    Args:
        colors: Color mapping to search.
        path: Key or dot-path, e.g. ``"text"`` or ``"header.title"``.
        default: Value returned when the path does not resolve.

    Returns:
        The color string, or ``default``.
    """
    segments = split_path(path)
    if not segments or segments[0] == MODES_KEY:
        return default

    node: Any = colors
    for segment in segments:
        if isinstance(node, Mapping):
            if segment not in node:
                return default
            node = node[segment]
        elif is_color_list(node) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            return default
    return node if isinstance(node, str) else default


def iter_color_paths(colors: Mapping[str, Any]) -> Iterator[tuple[tuple[str, ...], str]]:
    """Yield ``(path_segments, value)`` for every resolvable color.

    The ``modes`` key is skipped. Non-string leaves are not colors and are
    skipped as well.

    Args:
        colors: Color mapping to walk.

    Yields:
        Tuples of path segments and the color string found there.
    """
    yield from _walk(paintable_colors(colors), ())


def _walk(node: Any, prefix: tuple[str, ...]) -> Iterator[tuple[tuple[str, ...], str]]:
    if isinstance(node, str):
        yield prefix, node
    elif isinstance(node, Mapping):
        for key, value in node.items():
            yield from _walk(value, (*prefix, str(key)))
    elif is_color_list(node):
        for index, value in enumerate(node):
            yield from _walk(value, (*prefix, str(index)))


def is_color_list(node: Any) -> bool:
    """Return True for list-like color scales (not strings)."""
    return isinstance(node, Sequence) and not isinstance(node, str | bytes)
