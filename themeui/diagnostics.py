"""Structured configuration diagnostics.

Diagnostics are non-fatal findings about a theme's shape. They are handed to
an injectable sink instead of being printed, so callers decide where they go.
The default sink forwards them to the log.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from themeui.logger import get_logger

logger = get_logger(__name__)

INITIAL_MODE_COLLISION = "initial-mode-collision"


@dataclass(frozen=True)
class Diagnostic:
    """A single non-fatal finding.

    Attributes:
        code: Stable identifier for the kind of finding.
        message: Human-readable description.
        context: Extra values relevant to the finding (e.g. the mode name).
    """

    code: str
    message: str
    context: Mapping[str, object] = field(default_factory=dict)


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: write the diagnostic to the log at WARNING level.

    Args:
        diagnostic: The diagnostic to report.
    """
    logger.warning(f"[{diagnostic.code}] {diagnostic.message}")


class DiagnosticCollector:
    """Sink that keeps every diagnostic it receives."""

    def __init__(self) -> None:
        """Initialize an empty collector."""
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        """Store a diagnostic."""
        self.diagnostics.append(diagnostic)

    def codes(self) -> list[str]:
        """Return the codes of the collected diagnostics, in order."""
        return [diagnostic.code for diagnostic in self.diagnostics]
