"""
Core orchestration module for procsnap.

Runs the enabled collectors, isolates their failures, and assembles the
results into a Snapshot.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from procsnap import __version__
from procsnap.collectors import get_all_collectors
from procsnap.collectors.base import BaseCollector
from procsnap.config import Config
from procsnap.diagnostics import DiagnosticSink
from procsnap.errors import SourceUnavailable
from procsnap.models import Snapshot
from procsnap.reader import PseudoFileReader

logger = logging.getLogger(__name__)

REQUIRED_ROOTS = ("/proc", "/sys")


@dataclass
class CollectionResult:
    """Result of a single collector run."""

    collector_name: str
    success: bool
    data: Any = None
    error: str | None = None
    duration_ms: float = 0.0


@dataclass
class _Run:
    """State of one collect() call."""

    sink: DiagnosticSink
    results: dict[str, CollectionResult] = field(default_factory=dict)


class ProcSnap:
    """
    Main orchestrator for snapshot collection.

    Raises:
        SourceUnavailable: /proc or /sys is missing below the configured
            root. Nothing can be collected without them.
    """

    def __init__(self, config: Config | None = None, reader: PseudoFileReader | None = None):
        self.config = config or Config()
        self.reader = reader or PseudoFileReader(self.config.root, self.config.max_read_bytes)
        self.collectors = get_all_collectors()

        for required in REQUIRED_ROOTS:
            if not self.reader.is_dir(required):
                raise SourceUnavailable(
                    self.reader.path(required), "this needs access to /proc and /sys to work"
                )

    def collect(self, subsystems: list[str] | None = None) -> Snapshot:
        """
        Run collection on the enabled subsystems.

        Args:
            subsystems: Optional list narrowing the run to these subsystems.
                Subsystems disabled in the configuration are never run.

        Returns:
            Snapshot with every subsystem filled in or left empty, and all
            diagnostics recorded along the way.
        """
        enabled = self.config.enabled_subsystems()
        if subsystems:
            unknown = sorted(set(subsystems) - set(self.collectors))
            if unknown:
                raise ValueError(f"Unknown subsystems: {', '.join(unknown)}")
            enabled = [name for name in enabled if name in subsystems]

        collectors_to_run = {
            name: cls for name, cls in self.collectors.items() if name in enabled
        }
        run = _Run(sink=DiagnosticSink())

        logger.info(f"Running {len(collectors_to_run)} collectors")

        if self.config.workers > 1 and len(collectors_to_run) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                futures = {
                    name: pool.submit(self._run_one, name, cls, run.sink)
                    for name, cls in collectors_to_run.items()
                }
                for name, future in futures.items():
                    run.results[name] = future.result()
        else:
            for name, cls in collectors_to_run.items():
                run.results[name] = self._run_one(name, cls, run.sink)

        return self._assemble(run)

    def _run_one(
        self, name: str, collector_cls: type[BaseCollector], sink: DiagnosticSink
    ) -> CollectionResult:
        start = time.perf_counter()
        try:
            collector = collector_cls(self.reader, sink, self.config)
            data = collector.collect()
            duration = (time.perf_counter() - start) * 1000
            logger.debug(f"Collector '{name}' completed in {duration:.2f}ms")
            return CollectionResult(name, True, data, duration_ms=duration)

        except Exception as e:
            duration = (time.perf_counter() - start) * 1000
            error_msg = f"Collector '{name}' failed: {e}"
            sink.add(name, error_msg)
            logger.error(error_msg)
            return CollectionResult(name, False, error=error_msg, duration_ms=duration)

    def _assemble(self, run: _Run) -> Snapshot:
        values: dict[str, Any] = {}
        for name, result in run.results.items():
            collector_cls = self.collectors[name]
            values[collector_cls.field] = result.data if result.success else collector_cls.empty

        return Snapshot(
            timestamp=datetime.now(timezone.utc).isoformat(),
            procsnap_version=__version__,
            diagnostics=run.sink.snapshot(),
            **values,
        )


def run_collection(
    config: Config | None = None,
    subsystems: list[str] | None = None,
) -> Snapshot:
    """
    Convenience function to run a collection.

    Args:
        config: Optional configuration. Uses defaults if not provided.
        subsystems: Optional list of specific subsystems to run.

    Returns:
        The snapshot.
    """
    return ProcSnap(config).collect(subsystems)
