"""Theme providers and the hooks that read them.

A ThemeProvider owns one Scope. Entering a provider (``with``) makes it the
enclosing provider for :func:`use_theme_ui` and :func:`use_color_mode`, and
the default parent for providers created inside the block.

Usage:
    with ThemeProvider({"colors": {"text": "#000", "modes": {"dark": {"text": "#fff"}}}}):
        mode, set_mode = use_color_mode()
        set_mode("dark")
        use_theme_ui().theme.colors["text"]  # "#fff"
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from themeui.colors import compute_effective_theme, deep_merge, get_color, split_path
from themeui.custom_properties import NAMESPACE, Projection, apply_custom_properties, to_custom_property, to_var_name
from themeui.diagnostics import DiagnosticSink, log_diagnostic
from themeui.logger import get_logger
from themeui.preference import PreferenceDetector, SystemPreference
from themeui.scope import Scope
from themeui.settings import load_settings
from themeui.storage import FileModeStorage, ModeStorage
from themeui.stylesheet import render_color_mode_css
from themeui.theme import Theme

logger = get_logger(__name__)

ThemeInput = Theme | Mapping[str, Any] | Callable[[Theme], Theme | Mapping[str, Any]] | None


class ColorModeUsageError(RuntimeError):
    """Raised when color mode state is used outside any provider."""


class _Unset:
    """Marker for arguments that fall back to settings or the enclosing provider."""


_UNSET = _Unset()

_active_providers: ContextVar[tuple[ThemeProvider, ...]] = ContextVar("themeui_active_providers", default=())


@dataclass(frozen=True)
class ThemeContext:
    """What a provider exposes to its descendants.

    Attributes:
        theme: Effective theme with raw resolved colors.
        color_mode: Active mode, or None.
        set_color_mode: Changes the mode (and persists it).
        components: Component registry passed through for collaborators.
    """

    theme: Theme
    color_mode: str | None
    set_color_mode: Callable[[str], None]
    components: Mapping[str, Any] = field(default_factory=dict)


class ThemeProvider:
    """Provides a theme and a color mode to everything nested inside it."""

    def __init__(
        self,
        theme: ThemeInput = None,
        *,
        components: Mapping[str, Any] | None = None,
        storage: ModeStorage | None = None,
        preference: PreferenceDetector | None | _Unset = _UNSET,
        diagnostics: DiagnosticSink = log_diagnostic,
        parent: ThemeProvider | None | _Unset = _UNSET,
        own_mode: bool = False,
        namespace: str = NAMESPACE,
    ) -> None:
        """Initialize the provider and its scope.

        Args:
            theme: Theme, its JSON-like mapping, or a callable receiving the
                parent's base theme. Nested mappings are deep-merged over the
                parent's base theme.
            components: Component registry; extends the parent's.
            storage: Persisted mode store of a root. Defaults to the JSON store
                in the config directory. Nested providers always share the
                root's store.
            preference: Dark preference detector for a root. Defaults to the
                system detector unless disabled in settings; None skips it.
            diagnostics: Sink for configuration diagnostics.
            parent: Enclosing provider. Defaults to the provider currently
                entered; pass None to force a root.
            own_mode: Give a nested provider its own mode cell.
            namespace: Prefix token for CSS variable names.
        """
        if isinstance(parent, _Unset):
            parent = current_provider()
        self.parent = parent
        self.namespace = namespace

        if parent is None:
            self.base_theme = _coerce_theme(theme)
            self.components: Mapping[str, Any] = dict(components or {})
            self.storage = storage if storage is not None else _default_storage()
            if isinstance(preference, _Unset):
                preference = _default_preference()
            self.scope = Scope.create_root(self.base_theme, self.storage, preference, diagnostics=diagnostics)
        else:
            self.base_theme = _merge_theme(parent.base_theme, theme)
            self.components = {**parent.components, **(components or {})}
            self.storage = parent.storage
            self.scope = parent.scope.child(own_mode=own_mode)

    def __enter__(self) -> ThemeProvider:
        """Make this provider the enclosing one."""
        _active_providers.set((*_active_providers.get(), self))
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Stop being an enclosing provider.

        Only this provider leaves the stack, so exiting out of order keeps
        providers entered later active.
        """
        _active_providers.set(tuple(provider for provider in _active_providers.get() if provider is not self))

    @property
    def color_mode(self) -> str | None:
        """Active mode as seen from this provider."""
        return self.scope.get_mode()

    def set_color_mode(self, mode: str) -> None:
        """Change the active mode and persist it.

        Args:
            mode: New mode name.
        """
        self.scope.set_mode(mode)

    @property
    def effective_theme(self) -> Theme:
        """Base theme with the active mode merged in, recomputed on every access."""
        return compute_effective_theme(self.base_theme, self.color_mode)

    @property
    def projection(self) -> Projection:
        """Effective theme projected onto custom properties, when enabled."""
        return apply_custom_properties(self.effective_theme, self.base_theme.use_custom_properties, self.namespace)

    @property
    def style_theme(self) -> Theme:
        """Theme for the style pipeline (colors may be ``var(...)`` references)."""
        return self.projection.theme

    @property
    def css_var_values(self) -> dict[str, str]:
        """Raw colors of the active mode keyed by variable name."""
        return self.projection.css_var_values

    def style_color(self, path: str) -> str | None:
        """Resolve a color reference to a style value.

        Args:
            path: Color key or dot-path.

        Returns:
            ``var(--name,literal)`` with custom properties, the literal without,
            or None when the reference does not resolve to a color.
        """
        value = get_color(self.effective_theme.colors, path)
        if value is None:
            return None
        if not self.base_theme.use_custom_properties:
            return value
        return to_custom_property(to_var_name(split_path(path), self.namespace), value)

    def context(self) -> ThemeContext:
        """Return the context exposed to descendants."""
        return ThemeContext(
            theme=self.effective_theme,
            color_mode=self.color_mode,
            set_color_mode=self.set_color_mode,
            components=self.components,
        )

    def color_mode_css(self) -> str:
        """Render the global color mode stylesheet for this provider's theme."""
        return render_color_mode_css(self.base_theme, self.namespace)


def current_provider() -> ThemeProvider | None:
    """Return the innermost entered provider, or None."""
    providers = _active_providers.get()
    return providers[-1] if providers else None


def use_theme_ui() -> ThemeContext:
    """Read the enclosing provider's context.

    Returns:
        The context of the innermost entered provider.

    Raises:
        ColorModeUsageError: If no provider is entered.
    """
    provider = current_provider()
    if provider is None:
        raise ColorModeUsageError("use_theme_ui() must be called inside a ThemeProvider")
    return provider.context()


def use_color_mode() -> tuple[str | None, Callable[[str], None]]:
    """Read the active mode and its setter.

    Returns:
        A ``(mode, set_mode)`` pair.

    Raises:
        ColorModeUsageError: If no provider is entered.
    """
    provider = current_provider()
    if provider is None:
        raise ColorModeUsageError("use_color_mode() must be called inside a ThemeProvider")
    return provider.color_mode, provider.set_color_mode


def _coerce_theme(theme: ThemeInput) -> Theme:
    if theme is None:
        return Theme()
    if isinstance(theme, Theme):
        return theme
    if isinstance(theme, Mapping):
        return Theme.from_mapping(theme)
    return _coerce_theme(theme(Theme()))


def _merge_theme(outer: Theme, inner: ThemeInput) -> Theme:
    if inner is None:
        return outer
    if isinstance(inner, Theme):
        overrides = inner.to_dict()
        # The default flag is indistinguishable from unset, keep the outer one
        if inner.use_custom_properties:
            del overrides["useCustomProperties"]
        return Theme.from_mapping(deep_merge(outer.to_dict(), overrides))
    if isinstance(inner, Mapping):
        return Theme.from_mapping(deep_merge(outer.to_dict(), inner))
    result = inner(outer)
    return result if isinstance(result, Theme) else Theme.from_mapping(result)


def _default_storage() -> ModeStorage:
    return FileModeStorage(load_settings().get_storage_path())


def _default_preference() -> PreferenceDetector | None:
    if not load_settings().follow_system_preference:
        logger.debug("System color preference disabled in settings")
        return None
    return SystemPreference()
