"""
Non-fatal diagnostics collected during a snapshot.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A soft failure reported by one subsystem."""

    subsystem: str
    message: str

    def __str__(self) -> str:
        return f"[{self.subsystem}] {self.message}"


class DiagnosticSink:
    """
    Accumulates diagnostics from every collector of one collection run.

    Safe to share between worker threads. Order is preserved per subsystem,
    but not across subsystems when collectors run concurrently.
    """

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []
        self._lock = threading.Lock()

    def add(self, subsystem: str, message: str) -> Diagnostic:
        """Record a diagnostic and return it."""
        diagnostic = Diagnostic(subsystem, message)
        with self._lock:
            self._items.append(diagnostic)
        logger.warning(str(diagnostic))
        return diagnostic

    def for_subsystem(self, subsystem: str) -> list[Diagnostic]:
        """Diagnostics reported by one subsystem, in reporting order."""
        with self._lock:
            return [d for d in self._items if d.subsystem == subsystem]

    def snapshot(self) -> tuple[Diagnostic, ...]:
        """Immutable copy of everything recorded so far."""
        with self._lock:
            return tuple(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.snapshot())

    def __bool__(self) -> bool:
        return len(self) > 0
