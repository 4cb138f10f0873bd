"""
External temperature sources.

Each source talks to one daemon (or its log) and raises
CollaboratorFailure when that fails.
"""

from __future__ import annotations

from procsnap.config import Config
from procsnap.reader import PseudoFileReader
from procsnap.sensors.base import TemperatureSource
from procsnap.sensors.hddtemp import HddTempSource
from procsnap.sensors.mbmon import MbMonSource
from procsnap.sensors.sensord import SensordSource


def configure_sources(config: Config, reader: PseudoFileReader) -> list[TemperatureSource]:
    """Build the enabled sources, in the order their readings are reported."""
    sources: list[TemperatureSource] = []

    if config.temps_hddtemp:
        sources.append(
            HddTempSource(
                mode=config.hddtemp_mode,
                address=(config.hddtemp_host, config.hddtemp_port),
                log_path=config.hddtemp_log,
                reader=reader,
                timeout=config.daemon_timeout,
            )
        )

    if config.temps_mbmon:
        sources.append(
            MbMonSource(
                address=(config.mbmon_host, config.mbmon_port),
                timeout=config.daemon_timeout,
            )
        )

    if config.temps_sensord:
        sources.append(SensordSource(log_path=config.sensord_log, reader=reader))

    return sources


__all__ = [
    "TemperatureSource",
    "HddTempSource",
    "MbMonSource",
    "SensordSource",
    "configure_sources",
]
