"""
mbmon client.

mbmon in daemon mode (``mbmon -r -P 411``) sends one reading per line::

    TEMP0 : 35.0
    FAN0  : 2636
    VC0   :  +1.71
"""

from __future__ import annotations

import re

from procsnap.errors import CollaboratorFailure
from procsnap.models import TemperatureReading
from procsnap.sensors.base import read_socket

DEFAULT_PORT = 411

LINE_RE = re.compile(r"^(\w+)\s*:\s*([-+]?\d+(?:\.\d+)?)\s*$")


def unit_for(label: str) -> str:
    label = label.upper()
    if label.startswith("TEMP"):
        return "C"
    if label.startswith("FAN"):
        return "RPM"
    if label.startswith("V"):
        return "V"
    return ""


def parse_output(text: str, source: str = "mbmon") -> list[TemperatureReading]:
    readings = []
    for line in text.splitlines():
        if not line.strip():
            continue
        match = LINE_RE.match(line.strip())
        if not match:
            raise CollaboratorFailure(source, f"unexpected line: {line!r}")
        label, value = match.groups()
        readings.append(TemperatureReading(source, "", label, float(value), unit_for(label)))
    return readings


class MbMonSource:
    """Motherboard temperatures, fans and voltages from mbmon."""

    name = "mbmon"

    def __init__(self, address: tuple[str, int] | None = None, timeout: float = 5.0):
        self.address = address or ("127.0.0.1", DEFAULT_PORT)
        self.timeout = timeout

    def collect(self) -> list[TemperatureReading]:
        host, port = self.address
        return parse_output(read_socket(self.name, host, port, self.timeout), self.name)
