"""
Temperature collector.

Asks every configured external source for readings. A source that fails
is reported under its own name and the remaining sources still run.
"""

from __future__ import annotations

from procsnap.collectors.base import BaseCollector
from procsnap.errors import CollaboratorFailure
from procsnap.models import TemperatureReading
from procsnap.sensors import TemperatureSource, configure_sources


class TemperatureCollector(BaseCollector):
    """Aggregates readings from hddtemp, mbmon and sensord."""

    name = "temps"
    description = "Temperatures, fans and voltages from sensor daemons"
    field = "temps"
    empty = ()

    def __init__(self, *args, sources: list[TemperatureSource] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._sources = sources

    @property
    def sources(self) -> list[TemperatureSource]:
        if self._sources is None:
            self._sources = configure_sources(self.config, self.reader)
        return self._sources

    def collect(self) -> tuple[TemperatureReading, ...]:
        readings: list[TemperatureReading] = []
        for source in self.sources:
            try:
                result = source.collect()
            except CollaboratorFailure as e:
                self.sink.add(source.name, e.reason)
                continue
            self.logger.debug(f"{source.name} returned {len(result)} readings")
            readings.extend(result)
        return tuple(readings)
