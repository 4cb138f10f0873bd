"""
CPU collector.

Reads /proc/cpuinfo, one record per logical processor.
"""

from __future__ import annotations

from procsnap.collectors.base import BaseCollector
from procsnap.models import UNKNOWN, CpuRecord

CPUINFO_PATH = "/proc/cpuinfo"


def split_stanzas(text: str) -> list[dict[str, str]]:
    """
    Split /proc/cpuinfo into one key/value dict per processor.

    Stanzas are separated by blank lines. Lines are split on their first
    colon; lines with an empty key or value are ignored.
    """
    stanzas: list[dict[str, str]] = []
    current: dict[str, str] = {}

    for line in text.split("\n"):
        if not line.strip():
            if current:
                stanzas.append(current)
                current = {}
            continue

        key, _, value = line.partition(":")
        key = key.strip()
        value = value.strip()
        if not key or not value:
            continue
        current[key] = value

    # Last processor has no trailing blank line once the file is stripped
    if current:
        stanzas.append(current)

    return stanzas


def _parse_mhz(stanza: dict[str, str]) -> float | None:
    try:
        if "cpu MHz" in stanza:
            return float(stanza["cpu MHz"])
        if "Cpu0ClkTck" in stanza:
            # Sparc reports the clock in hexadecimal Hz
            return int(stanza["Cpu0ClkTck"], 16) / 1_000_000
    except ValueError:
        pass
    return None


def cpu_from_stanza(stanza: dict[str, str]) -> CpuRecord:
    """Build a CpuRecord, falling back to the keys older architectures use."""
    vendor = stanza.get("vendor_id", UNKNOWN)

    if "model name" in stanza:
        model = stanza["model name"]
    elif "cpu" in stanza:
        model = stanza["cpu"]
    else:
        model = UNKNOWN

    return CpuRecord(vendor=vendor, model=model, mhz=_parse_mhz(stanza))


def parse_cpuinfo(text: str) -> list[CpuRecord]:
    return [cpu_from_stanza(stanza) for stanza in split_stanzas(text)]


class CpuCollector(BaseCollector):
    """Collects per-processor vendor, model and clock speed."""

    name = "cpu"
    description = "Processor vendor, model and clock speed"
    field = "cpus"
    empty = ()

    def collect(self) -> tuple[CpuRecord, ...]:
        contents = self.read_file(CPUINFO_PATH)
        if contents is None:
            self.report(f"{CPUINFO_PATH} not readable")
            return self.empty

        cpus = tuple(parse_cpuinfo(contents))
        if not cpus:
            self.report(f"No processors found in {CPUINFO_PATH}")
        return cpus
