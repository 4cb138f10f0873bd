"""
hddtemp client.

In daemon mode hddtemp answers every TCP connection with a single line::

    |/dev/sda|ST3500418AS|38|C||/dev/sdb|WDC WD10EARS|SLP|*|

In syslog mode its periodic log lines are parsed instead::

    Jan  1 10:00:00 host hddtemp[1234]: /dev/sda: ST3500418AS: 38 C
"""

from __future__ import annotations

import re

from procsnap.errors import CollaboratorFailure, SourceUnavailable
from procsnap.models import TemperatureReading
from procsnap.reader import PseudoFileReader
from procsnap.sensors.base import read_socket

DEFAULT_PORT = 7634
MODES = ("daemon", "syslog")

SYSLOG_RE = re.compile(r"hddtemp(?:\[\d+\])?: (/dev/\S+): (.+): (-?\d+(?:\.\d+)?) ?(C|F)\s*$")


def _number(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        # SLP (sleeping), NA or UNK
        return None


def parse_daemon_output(text: str, source: str = "hddtemp") -> list[TemperatureReading]:
    """Parse the ``|dev|model|temp|unit|`` records sent by the daemon."""
    text = text.strip()
    if not text:
        return []
    if not (text.startswith("|") and text.endswith("|")):
        raise CollaboratorFailure(source, f"unexpected daemon output: {text[:80]!r}")

    readings = []
    for record in text[1:-1].split("||"):
        fields = record.split("|")
        if len(fields) != 4:
            raise CollaboratorFailure(source, f"malformed record: {record!r}")
        path, model, temp, unit = fields
        value = _number(temp)
        if value is None:
            continue
        readings.append(TemperatureReading(source, path, model.strip(), value, unit))
    return readings


def parse_syslog(lines, source: str = "hddtemp") -> list[TemperatureReading]:
    """Latest hddtemp reading per disk from syslog lines."""
    latest: dict[str, TemperatureReading] = {}
    for line in lines:
        match = SYSLOG_RE.search(line)
        if match:
            path, model, temp, unit = match.groups()
            latest[path] = TemperatureReading(source, path, model.strip(), float(temp), unit)
    return list(latest.values())


class HddTempSource:
    """Disk temperatures from hddtemp."""

    name = "hddtemp"

    def __init__(
        self,
        mode: str = "daemon",
        address: tuple[str, int] | None = None,
        log_path: str = "/var/log/syslog",
        reader: PseudoFileReader | None = None,
        timeout: float = 5.0,
    ):
        self.mode = mode
        self.address = address or ("127.0.0.1", DEFAULT_PORT)
        self.log_path = log_path
        self.reader = reader or PseudoFileReader()
        self.timeout = timeout

    def collect(self) -> list[TemperatureReading]:
        if self.mode not in MODES:
            raise CollaboratorFailure(self.name, f"mode must be one of {MODES}, not {self.mode!r}")

        if self.mode == "daemon":
            host, port = self.address
            return parse_daemon_output(read_socket(self.name, host, port, self.timeout), self.name)

        try:
            lines = self.reader.lines(self.log_path)
        except SourceUnavailable as e:
            raise CollaboratorFailure(self.name, f"cannot read {self.log_path}: {e.reason}") from e
        try:
            return parse_syslog(lines, self.name)
        finally:
            lines.close()
