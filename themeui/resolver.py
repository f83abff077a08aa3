"""Initial color mode resolution."""

from __future__ import annotations

from typing import Protocol

from themeui.diagnostics import INITIAL_MODE_COLLISION, Diagnostic, DiagnosticSink, log_diagnostic
from themeui.logger import get_logger
from themeui.preference import PreferenceDetector
from themeui.storage import ModeStorage
from themeui.theme import Theme

logger = get_logger(__name__)

# Mode chosen when the environment prefers a dark presentation
DARK_MODE = "dark"


class ModeSource(Protocol):
    """Anything exposing a current mode, such as an ancestor scope."""

    def get_mode(self) -> str | None:
        """Return the current mode."""
        ...


def resolve_initial_mode(
    theme: Theme,
    storage: ModeStorage,
    preference: PreferenceDetector | None,
    *,
    ancestor: ModeSource | None = None,
    diagnostics: DiagnosticSink = log_diagnostic,
) -> str | None:
    """Compute the initial mode of a scope.

    A scope with an ancestor takes the ancestor's current mode and resolves
    nothing on its own. Otherwise the precedence is: stored mode, then the
    dark preference, then the theme's ``initial_color_mode``, else None.
    Nothing is written back to storage.

    Args:
        theme: Theme configuring the scope.
        storage: Persisted mode store.
        preference: Dark preference detector, or None to skip that step.
        ancestor: Nearest enclosing scope, if any.
        diagnostics: Sink receiving configuration diagnostics.

    Returns:
        The initial mode, or None when no mode is established.
    """
    if ancestor is not None:
        return ancestor.get_mode()

    check_theme(theme, diagnostics)

    stored = storage.get()
    if stored:
        logger.debug(f"Initial color mode {stored!r} from storage")
        return stored

    if preference is not None and preference.prefers_dark():
        logger.debug(f"Initial color mode {DARK_MODE!r} from environment preference")
        return DARK_MODE

    if theme.initial_color_mode is not None:
        logger.debug(f"Initial color mode {theme.initial_color_mode!r} from theme")
        return theme.initial_color_mode

    logger.debug("No initial color mode established")
    return None


def check_theme(theme: Theme, diagnostics: DiagnosticSink = log_diagnostic) -> None:
    """Report configuration problems in a theme's color mode setup.

    Args:
        theme: Theme to check.
        diagnostics: Sink receiving the findings.
    """
    initial = theme.initial_color_mode
    if initial is not None and initial in theme.modes:
        diagnostics(
            Diagnostic(
                code=INITIAL_MODE_COLLISION,
                message=(
                    f"initialColorMode {initial!r} is also defined in colors.modes; "
                    "the base colors are expected to describe the initial mode"
                ),
                context={"mode": initial},
            )
        )
