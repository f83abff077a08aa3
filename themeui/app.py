"""Textual preview app for color modes."""

from pathlib import Path
from typing import ClassVar

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Header, Static

from themeui.colors import compute_effective_theme, iter_color_paths
from themeui.custom_properties import to_var_name
from themeui.logger import add_sink, get_logger, remove_sink
from themeui.presets import get_preset
from themeui.provider import ThemeProvider
from themeui.settings import load_settings
from themeui.textual_theme import is_hex_color, textual_theme_name, to_textual_theme
from themeui.theme import available_modes

logger = get_logger(__name__)

# Path to styles directory
STYLES_DIR = Path(__file__).parent / "styles"


class ColorModePreview(App[None]):
    """Shows a theme's palette in the active color mode and lets the user switch modes."""

    TITLE = "themeui"
    CSS_PATH: ClassVar[list[Path]] = [STYLES_DIR / "app.tcss"]
    BINDINGS: ClassVar[tuple[tuple[str, str, str], ...]] = (
        ("q", "quit", "Quit"),
        ("m", "cycle_mode", "Next Mode"),
    )

    def __init__(self, provider: ThemeProvider, log_level: str = "WARNING") -> None:
        """Initialize the preview app.

        Args:
            provider: Provider holding the theme and color mode to preview.
            log_level: Minimum level of log messages shown as notifications.
        """
        super().__init__()
        self.provider = provider
        self.log_level = log_level
        self._log_sink_id: int | None = None

    def compose(self) -> ComposeResult:
        """Create the UI layout.

        Yields:
            The widgets that make up the application UI.
        """
        yield Header()
        with Container(id="preview-panel"):
            yield Static(id="mode-label")
            yield DataTable(id="palette-table")
        yield Footer()

    def on_mount(self) -> None:
        """Register one Textual theme per mode and show the active one."""
        self._log_sink_id = add_sink(self._notify_log, level=self.log_level)

        base_theme = self.provider.base_theme
        for mode in (None, *available_modes(base_theme)):
            effective = compute_effective_theme(base_theme, mode)
            self.register_theme(to_textual_theme(effective, textual_theme_name(mode)))

        table = self.query_one("#palette-table", DataTable)
        table.cursor_type = "row"
        table.add_columns("Swatch", "Color", "Variable", "Value")
        self._show_mode()

    def on_unmount(self) -> None:
        """Detach the notification sink."""
        if self._log_sink_id is not None:
            remove_sink(self._log_sink_id)
            self._log_sink_id = None

    def mode_sequence(self) -> list[str]:
        """Modes the user can cycle through: the initial mode, then every defined mode."""
        base_theme = self.provider.base_theme
        sequence: list[str] = []
        if base_theme.initial_color_mode is not None:
            sequence.append(base_theme.initial_color_mode)
        sequence.extend(mode for mode in available_modes(base_theme) if mode not in sequence)
        return sequence

    def action_cycle_mode(self) -> None:
        """Switch to the next color mode."""
        sequence = self.mode_sequence()
        if not sequence:
            self.notify("This theme defines no color modes", severity="warning")
            return

        current = self.provider.color_mode
        next_index = sequence.index(current) + 1 if current in sequence else 0
        next_mode = sequence[next_index % len(sequence)]
        self.provider.set_color_mode(next_mode)
        self._show_mode()

    def _show_mode(self) -> None:
        """Apply the active mode to the Textual theme, label and palette table."""
        mode = self.provider.color_mode
        registered_mode = mode if mode in available_modes(self.provider.base_theme) else None
        self.theme = textual_theme_name(registered_mode)

        self.query_one("#mode-label", Static).update(f"[bold]Color mode:[/bold] {mode or '(none)'}")

        effective = self.provider.effective_theme
        table = self.query_one("#palette-table", DataTable)
        table.clear()
        count = 0
        for path, value in iter_color_paths(effective.colors):
            # Rich styles only accept six-digit hex colors
            paintable = is_hex_color(value) and len(value) == 7  # noqa: PLR2004
            swatch = Text("  ██  ", style=value) if paintable else Text("")
            table.add_row(swatch, ".".join(path), to_var_name(path, self.provider.namespace), value)
            count += 1
        logger.debug(f"Showing color mode {mode!r} with {count} colors")

    def _notify_log(self, message: object) -> None:
        """Show log messages as notifications."""
        self.notify(str(message).strip(), severity="warning")


def main() -> None:
    """Run the color mode preview with the preset chosen in settings."""
    settings = load_settings()
    logger.info(f"Starting themeui preview with preset {settings.preset!r}")
    provider = ThemeProvider(get_preset(settings.preset), parent=None)
    app = ColorModePreview(provider, log_level=settings.log_level)
    app.run()
    logger.info("themeui preview exited")
