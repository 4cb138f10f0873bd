"""
sensord client.

sensord (part of lm-sensors) logs its readings to syslog::

    Jan  1 10:00:00 host sensord: Chip: coretemp-isa-0000
    Jan  1 10:00:00 host sensord: Core 0: 45.0 C
    Jan  1 10:00:00 host sensord: fan1: 2636 RPM
"""

from __future__ import annotations

import re

from procsnap.errors import CollaboratorFailure, SourceUnavailable
from procsnap.models import TemperatureReading
from procsnap.reader import PseudoFileReader

LINE_RE = re.compile(r"sensord(?:\[\d+\])?: ([^:]+): ([-+]?\d+(?:\.\d+)?) ?(C|V|RPM)\s*$")
CHIP_RE = re.compile(r"sensord(?:\[\d+\])?: Chip: (\S+)")


def parse_log(lines, source: str = "sensord") -> list[TemperatureReading]:
    """Latest reading per chip and label."""
    latest: dict[tuple[str, str], TemperatureReading] = {}
    chip = ""
    for line in lines:
        chip_match = CHIP_RE.search(line)
        if chip_match:
            chip = chip_match.group(1)
            continue
        match = LINE_RE.search(line)
        if match:
            label, value, unit = match.groups()
            label = label.strip()
            latest[(chip, label)] = TemperatureReading(source, chip, label, float(value), unit)
    return list(latest.values())


class SensordSource:
    """Sensor readings logged by sensord."""

    name = "sensord"

    def __init__(self, log_path: str = "/var/log/messages", reader: PseudoFileReader | None = None):
        self.log_path = log_path
        self.reader = reader or PseudoFileReader()

    def collect(self) -> list[TemperatureReading]:
        try:
            lines = self.reader.lines(self.log_path)
        except SourceUnavailable as e:
            raise CollaboratorFailure(self.name, f"cannot read {self.log_path}: {e.reason}") from e
        try:
            return parse_log(lines, self.name)
        finally:
            lines.close()
