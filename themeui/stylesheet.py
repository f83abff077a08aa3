"""Global stylesheet for color modes.

Emits one ``:root`` rule with the initial mode's colors as custom properties
plus one rule per mode in ``colors.modes`` holding only the variables that
mode overrides. Which mode rule applies is decided by a class on an
enclosing element, see :func:`mode_class_name`.
"""

from __future__ import annotations

from collections.abc import Mapping

from themeui.colors import compute_effective_theme, iter_color_paths
from themeui.custom_properties import NAMESPACE, to_name_token, to_var_name
from themeui.theme import Theme, available_modes

ROOT_SELECTOR = ":root"


def mode_class_name(mode: str, namespace: str = NAMESPACE) -> str:
    """Class name selecting a mode's rule, e.g. ``theme-ui-dark``.

    The mode is lower-cased and unsafe characters become dashes, so
    ``"High Contrast"`` selects ``theme-ui-high-contrast``.
    """
    return f"{namespace}-{to_name_token(mode)}"


def custom_property_values(colors: Mapping[str, object], namespace: str = NAMESPACE) -> dict[str, str]:
    """Map variable names to raw colors for every resolvable color path."""
    return {to_var_name(path, namespace): value for path, value in iter_color_paths(colors)}


def build_color_mode_rules(theme: Theme, namespace: str = NAMESPACE) -> dict[str, dict[str, str]]:
    """Build selector to declarations for every color mode of a theme.

    Args:
        theme: Base theme (not merged with any mode).
        namespace: Prefix token for variable and class names.

    Returns:
        Rules keyed by selector, root first. Rules without declarations are
        left out.
    """
    initial = compute_effective_theme(theme, theme.initial_color_mode)
    rules: dict[str, dict[str, str]] = {}

    root = custom_property_values(initial.colors, namespace)
    if root:
        rules[ROOT_SELECTOR] = root

    for mode in available_modes(theme):
        declarations = custom_property_values(theme.modes[mode], namespace)
        if declarations:
            rules[f".{mode_class_name(mode, namespace)}"] = declarations
    return rules


def render_rules(rules: Mapping[str, Mapping[str, str]]) -> str:
    """Render rules as CSS text, one declaration per line."""
    blocks = []
    for selector, declarations in rules.items():
        body = "".join(f"  {name}: {value};\n" for name, value in declarations.items())
        blocks.append(f"{selector} {{\n{body}}}\n")
    return "\n".join(blocks)


def render_color_mode_css(theme: Theme, namespace: str = NAMESPACE) -> str:
    """Render the color mode stylesheet of a theme.

    Args:
        theme: Base theme.
        namespace: Prefix token for variable and class names.

    Returns:
        CSS text, or an empty string when the theme has no colors.
    """
    return render_rules(build_color_mode_rules(theme, namespace))
