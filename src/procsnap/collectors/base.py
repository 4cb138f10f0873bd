"""
Base collector class that all collectors inherit from.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from procsnap.config import Config
from procsnap.diagnostics import DiagnosticSink
from procsnap.reader import PseudoFileReader

logger = logging.getLogger(__name__)


class BaseCollector(ABC):
    """
    Abstract base class for all subsystem collectors.

    A collector never raises for a missing or malformed source. It returns
    its ``empty`` value and reports what went wrong through ``report``.
    """

    name: str = "base"
    description: str = "Base collector"
    # Snapshot attribute this collector fills in
    field: str = ""
    # Value used when the subsystem is disabled or its source is unusable
    empty: Any = ()

    def __init__(
        self,
        reader: PseudoFileReader | None = None,
        sink: DiagnosticSink | None = None,
        config: Config | None = None,
    ):
        self.reader = reader or PseudoFileReader()
        self.sink = sink if sink is not None else DiagnosticSink()
        self.config = config or Config()
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    @abstractmethod
    def collect(self) -> Any:
        """
        Collect and return data.

        Returns:
            Typed records for this subsystem, or ``empty``.
        """
        pass

    def report(self, message: str) -> None:
        """Record a non-fatal diagnostic for this subsystem."""
        self.sink.add(self.name, message)

    def read_file(self, path: str, default: str | None = None) -> str | None:
        """Read a pseudo-file, returning ``default`` if it cannot be read."""
        return self.reader.read(path, default)
