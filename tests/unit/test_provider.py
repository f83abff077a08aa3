"""Tests for theme providers and hooks."""

import pytest

from themeui.diagnostics import INITIAL_MODE_COLLISION, DiagnosticCollector
from themeui.preference import StaticPreference
from themeui.provider import ColorModeUsageError, ThemeProvider, current_provider, use_color_mode, use_theme_ui
from themeui.storage import STORAGE_KEY, FileModeStorage, MemoryModeStorage
from themeui.theme import Theme


def _provider(theme: object = None, storage: MemoryModeStorage | None = None, **kwargs: object) -> ThemeProvider:
    kwargs.setdefault("preference", StaticPreference(dark=False))
    return ThemeProvider(theme, storage=storage or MemoryModeStorage(), **kwargs)  # type: ignore[arg-type]


class TestColorModeResolution:
    """Tests for the mode a provider starts with."""

    def test_initial_color_mode(self) -> None:
        """The theme default is used when nothing else applies."""
        with _provider({"initialColorMode": "light"}):
            mode, _ = use_color_mode()
        assert mode == "light"

    def test_does_not_initialize_mode(self) -> None:
        """Without configuration there is no mode."""
        with _provider():
            mode, _ = use_color_mode()
        assert mode is None

    def test_initializes_from_storage(self, storage: MemoryModeStorage) -> None:
        """A stored mode is picked up."""
        storage.set("dark")
        with _provider(storage=storage):
            mode, _ = use_color_mode()
        assert mode == "dark"

    def test_initializes_from_dark_preference(self) -> None:
        """The dark preference sets the dark mode."""
        with _provider(preference=StaticPreference(dark=True)):
            mode, _ = use_color_mode()
        assert mode == "dark"

    def test_no_dark_preference(self) -> None:
        """A false preference leaves the mode unset."""
        with _provider(preference=StaticPreference(dark=False)):
            mode, _ = use_color_mode()
        assert mode is None

    def test_default_preference_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without an explicit detector the system preference is used."""
        monkeypatch.setenv("THEMEUI_COLOR_SCHEME", "dark")
        provider = ThemeProvider(storage=MemoryModeStorage(), parent=None)
        assert provider.color_mode == "dark"

    def test_default_storage_is_config_file(self) -> None:
        """Without an explicit store the JSON store in the config dir is used."""
        provider = ThemeProvider(preference=None, parent=None)
        assert isinstance(provider.storage, FileModeStorage)
        provider.set_color_mode("dark")
        assert ThemeProvider(preference=None, parent=None).color_mode == "dark"

    def test_collision_warns_once(self, collector: DiagnosticCollector) -> None:
        """initialColorMode matching a mode key is reported once and still used."""
        theme = {
            "initialColorMode": "dark",
            "colors": {"text": "#000", "background": "#fff", "modes": {"dark": {"text": "#fff", "background": "#000"}}},
        }
        provider = _provider(theme, diagnostics=collector)
        assert provider.color_mode == "dark"
        assert collector.codes() == [INITIAL_MODE_COLLISION]


class TestSetColorMode:
    """Tests for changing the mode."""

    def test_updates_state(self, storage: MemoryModeStorage) -> None:
        """Setting the mode is visible immediately and persisted."""
        with _provider(storage=storage):
            _, set_mode = use_color_mode()
            set_mode("dark")
            mode, _ = use_color_mode()
        assert mode == "dark"
        assert storage.get() == "dark"
        assert storage.data[STORAGE_KEY] == "dark"

    def test_color_mode_passed_through_theme_context(self) -> None:
        """After a change, the context colors follow the new mode."""
        theme = {"colors": {"text": "#000", "modes": {"dark": {"text": "cyan"}}}}
        with _provider(theme) as provider:
            use_theme_ui().set_color_mode("dark")
            context = use_theme_ui()
        assert context.color_mode == "dark"
        assert context.theme.colors["text"] == "cyan"
        assert provider.style_color("text") == "var(--theme-ui-colors-text,cyan)"


class TestNestedProviders:
    """Tests for nested providers."""

    def test_inherits_color_mode_from_parent(self) -> None:
        """An inner provider takes the outer mode instead of resolving its own."""
        with _provider({"initialColorMode": "outer"}), ThemeProvider({"initialColorMode": "inner"}) as inner:
            mode, _ = use_color_mode()
        assert mode == "outer"
        assert inner.parent is not None

    def test_inner_set_updates_outer(self) -> None:
        """Setting the mode inside reaches the outer scope."""
        with _provider({"initialColorMode": "outer"}) as outer, ThemeProvider():
            _, set_mode = use_color_mode()
            set_mode("dark")
        assert outer.color_mode == "dark"

    def test_inner_own_mode(self) -> None:
        """An inner provider with its own cell is isolated from later outer changes."""
        with _provider({"initialColorMode": "outer"}) as outer, ThemeProvider(own_mode=True) as inner:
            outer.set_color_mode("dark")
            assert inner.color_mode == "outer"

    def test_inner_theme_merged_over_outer(self) -> None:
        """Inner theme mappings deep-merge over the outer base theme."""
        outer_theme = {"colors": {"text": "#000", "header": {"title": "blue", "subtitle": "navy"}}, "fonts": "serif"}
        with _provider(outer_theme), ThemeProvider({"colors": {"header": {"title": "red"}}}) as inner:
            pass
        assert inner.base_theme.colors == {"text": "#000", "header": {"title": "red", "subtitle": "navy"}}
        assert inner.base_theme.extras == {"fonts": "serif"}

    def test_inner_theme_instance_keeps_outer_flag(self) -> None:
        """A nested Theme that leaves useCustomProperties at its default keeps the outer setting."""
        with _provider({"useCustomProperties": False, "colors": {"text": "#000"}}) as outer:
            inner = ThemeProvider(Theme(colors={"primary": "red"}), parent=outer)
        assert inner.base_theme.use_custom_properties is False
        assert inner.base_theme.colors == {"text": "#000", "primary": "red"}
        assert inner.style_color("primary") == "red"

    def test_inner_theme_instance_can_disable_flag(self) -> None:
        """A nested Theme can still turn custom properties off."""
        with _provider({"colors": {"text": "#000"}}) as outer:
            inner = ThemeProvider(Theme(use_custom_properties=False), parent=outer)
        assert inner.base_theme.use_custom_properties is False

    def test_inner_theme_callable(self) -> None:
        """A callable receives the outer base theme."""
        with _provider({"colors": {"text": "#000"}}):
            inner = ThemeProvider(lambda outer: outer.with_colors({**outer.colors, "primary": "tomato"}))
        assert inner.base_theme.colors == {"text": "#000", "primary": "tomato"}

    def test_inner_uses_outer_storage(self, storage: MemoryModeStorage) -> None:
        """Nested providers share the outer store."""
        with _provider(storage=storage), ThemeProvider() as inner:
            inner.set_color_mode("dark")
        assert storage.get() == "dark"

    def test_components_extend_outer(self) -> None:
        """Component registries are merged, inner winning."""
        with _provider(components={"h1": "outer-h1", "pre": "outer-pre"}), ThemeProvider(components={"h1": "inner"}):
            context = use_theme_ui()
        assert context.components == {"h1": "inner", "pre": "outer-pre"}

    def test_explicit_root_inside_block(self) -> None:
        """parent=None forces an independent root."""
        with _provider({"initialColorMode": "outer"}):
            root = _provider({"initialColorMode": "inner"}, parent=None)
        assert root.parent is None
        assert root.color_mode == "inner"


class TestThemeContext:
    """Tests for the context returned by use_theme_ui."""

    def test_returns_current_color_mode_colors(self, storage: MemoryModeStorage) -> None:
        """Context colors follow the stored mode."""
        storage.set("tomato")
        theme = {
            "initialColorMode": "light",
            "colors": {
                "text": "tomato",
                "background": "black",
                "modes": {"tomato": {"text": "black", "background": "tomato"}},
            },
        }
        with _provider(theme, storage=storage):
            colors = use_theme_ui().theme.colors
        assert colors["text"] == "black"
        assert colors["background"] == "tomato"

    def test_raw_values_with_custom_properties(self) -> None:
        """The context exposes raw colors even with custom properties on."""
        theme = {
            "useCustomProperties": True,
            "initialColorMode": "light",
            "colors": {"primary": "tomato", "modes": {"dark": {"primary": "black"}}},
        }
        with _provider(theme) as provider:
            color = use_theme_ui().theme.colors["primary"]
        assert color == "tomato"
        assert provider.style_theme.colors["primary"] == "var(--theme-ui-colors-primary,tomato)"

    def test_retains_components(self) -> None:
        """Collaborator fields are passed through the context."""
        with _provider(components={"h1": "Heading", "pre": "Code", "blockquote": "Quote"}):
            components = use_theme_ui().components
        assert components["h1"]
        assert components["pre"]
        assert components["blockquote"]

    def test_effective_theme_not_cached(self) -> None:
        """The effective theme is recomputed after a mode change."""
        provider = _provider({"colors": {"text": "#000", "modes": {"dark": {"text": "#fff"}}}})
        before = provider.effective_theme
        provider.set_color_mode("dark")
        assert before.colors["text"] == "#000"
        assert provider.effective_theme.colors["text"] == "#fff"


class TestStyleColor:
    """Tests for style values of color references."""

    def test_converts_to_custom_property(self) -> None:
        """With custom properties on, base colors become var() references."""
        theme = {"useCustomProperties": True, "colors": {"text": "#000", "modes": {"dark": {"text": "#fff"}}}}
        provider = _provider(theme)
        assert provider.style_color("text") == "var(--theme-ui-colors-text,#000)"

    def test_dot_notation_with_color_modes(self) -> None:
        """Dot-paths resolve in the active mode."""
        theme = {
            "initialColorMode": "light",
            "useCustomProperties": False,
            "colors": {"header": {"title": "blue"}, "modes": {"dark": {"header": {"title": "tomato"}}}},
        }
        provider = _provider(theme)
        provider.set_color_mode("dark")
        assert provider.style_color("header.title") == "tomato"

    def test_dot_notation_with_custom_properties(self) -> None:
        """Dot-paths produce dashed variable names and raw values."""
        theme = {
            "initialColorMode": "light",
            "useCustomProperties": True,
            "colors": {"header": {"title": "blue"}, "modes": {"dark": {"header": {"title": "tomato"}}}},
        }
        provider = _provider(theme)
        provider.set_color_mode("dark")
        assert provider.style_color("header.title") == "var(--theme-ui-colors-header-title,tomato)"
        assert provider.css_var_values["--theme-ui-colors-header-title"] == "tomato"

    def test_unresolvable_reference_is_none(self) -> None:
        """References that do not resolve to a string are no color."""
        provider = _provider({"colors": {"header": {"title": "blue"}}})
        assert provider.style_color("header") is None
        assert provider.style_color("missing.path") is None

    def test_color_mode_css(self) -> None:
        """The provider renders its theme's stylesheet."""
        provider = _provider({"colors": {"text": "tomato", "modes": {"dark": {"text": "black"}}}})
        css = provider.color_mode_css()
        assert ":root {" in css
        assert ".theme-ui-dark {" in css

    def test_color_mode_css_empty_without_colors(self) -> None:
        """A provider without colors renders nothing."""
        assert _provider().color_mode_css() == ""


class TestHooksOutsideProvider:
    """Tests for hook usage without an enclosing provider."""

    def test_use_color_mode_raises(self) -> None:
        """use_color_mode fails fast outside a provider."""
        with pytest.raises(ColorModeUsageError):
            use_color_mode()

    def test_use_theme_ui_raises(self) -> None:
        """use_theme_ui fails fast outside a provider."""
        with pytest.raises(ColorModeUsageError):
            use_theme_ui()

    def test_provider_stack_restored(self) -> None:
        """Leaving a provider restores the previous one."""
        with _provider() as outer:
            with ThemeProvider() as inner:
                assert current_provider() is inner
            assert current_provider() is outer
        assert current_provider() is None

    def test_unentered_provider_is_not_enclosing(self) -> None:
        """Creating a provider without entering it does not enclose anything."""
        _provider()
        with pytest.raises(ColorModeUsageError):
            use_color_mode()

    def test_out_of_order_exit_keeps_later_provider(self) -> None:
        """Exiting an outer provider first leaves the inner one enclosing."""
        outer = _provider().__enter__()
        inner = ThemeProvider().__enter__()
        outer.__exit__(None, None, None)
        assert current_provider() is inner
        inner.__exit__(None, None, None)
        assert current_provider() is None
