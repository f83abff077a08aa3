"""Scopes holding the active color mode.

Scopes form a tree through explicit parent links. A scope either owns a mode
cell or reads through to the nearest ancestor that owns one. Root scopes
always own their cell.
"""

from __future__ import annotations

from collections.abc import Iterator

from themeui.diagnostics import DiagnosticSink, log_diagnostic
from themeui.logger import get_logger
from themeui.preference import PreferenceDetector
from themeui.resolver import resolve_initial_mode
from themeui.storage import ModeStorage
from themeui.theme import Theme

logger = get_logger(__name__)


class Scope:
    """One node of the provider tree."""

    def __init__(
        self,
        storage: ModeStorage,
        *,
        parent: Scope | None = None,
        mode: str | None = None,
        owns_mode: bool = True,
    ) -> None:
        """Initialize a scope.

        Args:
            storage: Persisted mode store written by set_mode.
            parent: Enclosing scope, or None for a root.
            mode: Initial value of this scope's own cell.
            owns_mode: Whether this scope has its own cell. Forced for roots.
        """
        self.storage = storage
        self.parent = parent
        self.owns_mode = owns_mode or parent is None
        self._mode = mode if self.owns_mode else None

    @classmethod
    def create_root(
        cls,
        theme: Theme,
        storage: ModeStorage,
        preference: PreferenceDetector | None,
        *,
        diagnostics: DiagnosticSink = log_diagnostic,
    ) -> Scope:
        """Create a root scope, resolving its initial mode.

        Args:
            theme: Theme configuring the scope.
            storage: Persisted mode store.
            preference: Dark preference detector, or None to skip it.
            diagnostics: Sink receiving configuration diagnostics.

        Returns:
            The new root scope.
        """
        mode = resolve_initial_mode(theme, storage, preference, diagnostics=diagnostics)
        logger.debug(f"Created root scope with mode {mode!r}")
        return cls(storage, mode=mode)

    def child(self, *, own_mode: bool = False) -> Scope:
        """Create a nested scope.

        The child never resolves on its own. With ``own_mode`` it gets a cell
        seeded from this scope's current mode; otherwise it reads through.

        Args:
            own_mode: Whether the child owns a separate mode cell.

        Returns:
            The new child scope.
        """
        mode = resolve_initial_mode(Theme(), self.storage, None, ancestor=self) if own_mode else None
        return Scope(self.storage, parent=self, mode=mode, owns_mode=own_mode)

    def ancestors(self) -> Iterator[Scope]:
        """Iterate over ancestors, nearest first."""
        scope = self.parent
        while scope is not None:
            yield scope
            scope = scope.parent

    def owner(self) -> Scope:
        """Return the nearest scope (this one included) that owns a mode cell."""
        if self.owns_mode:
            return self
        for scope in self.ancestors():
            if scope.owns_mode:
                return scope
        # Unreachable: roots always own their cell
        raise RuntimeError("Scope chain has no mode owner")

    def get_mode(self) -> str | None:
        """Return the mode visible from this scope."""
        return self.owner()._mode

    def set_mode(self, next_mode: str) -> None:
        """Set the mode of the cell this scope reads, and persist it.

        Ancestors above the owning cell are never touched.

        Args:
            next_mode: New mode name.

        Raises:
            TypeError: If ``next_mode`` is not a string.
        """
        if not isinstance(next_mode, str):
            raise TypeError(f"Color mode must be a string, got {type(next_mode).__name__}")
        owner = self.owner()
        previous = owner._mode
        owner._mode = next_mode
        self.storage.set(next_mode)
        logger.info(f"Color mode changed from {previous!r} to {next_mode!r}")
