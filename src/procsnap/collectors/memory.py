"""
Memory collector.

Physical memory from /proc/meminfo and swap devices from /proc/swaps.
"""

from __future__ import annotations

import re

from procsnap.collectors.base import BaseCollector
from procsnap.models import MemoryInfo, SwapDevice

MEMINFO_PATH = "/proc/meminfo"
SWAPS_PATH = "/proc/swaps"

MEMINFO_RE = re.compile(r"^([^:\n]+):\s+(\d+)\s*(?:k[bB])?\s*", re.MULTILINE)
SWAPS_RE = re.compile(r"^(\S+)[ \t]+(\S+)[ \t]+(\d+)[ \t]+(\d+)", re.MULTILINE)


def parse_meminfo(text: str) -> dict[str, int]:
    """Map each /proc/meminfo key to its raw (kB) value."""
    return {key: int(value) for key, value in MEMINFO_RE.findall(text)}


def parse_swaps(text: str) -> list[SwapDevice]:
    """Swap devices from /proc/swaps, sizes converted to bytes."""
    return [
        SwapDevice(device=device, type=swap_type, size=int(size) * 1024, used=int(used) * 1024)
        for device, swap_type, size, used in SWAPS_RE.findall(text)
    ]


class MemoryCollector(BaseCollector):
    """Collects physical and swap memory information."""

    name = "ram"
    description = "Physical memory and swap devices"
    field = "memory"
    empty = None

    def collect(self) -> MemoryInfo | None:
        meminfo = self.read_file(MEMINFO_PATH)
        swaps = self.read_file(SWAPS_PATH)
        if meminfo is None or swaps is None:
            self.report(f"{SWAPS_PATH} and/or {MEMINFO_PATH} are not readable")
            return self.empty

        values = parse_meminfo(meminfo)

        # Absent keys count as zero so consumers can still do arithmetic
        return MemoryInfo(
            total=values.get("MemTotal", 0) * 1024,
            free=values.get("MemFree", 0) * 1024,
            swap_total=values.get("SwapTotal", 0) * 1024,
            swap_free=values.get("SwapFree", 0) * 1024,
            swap_cached=values.get("SwapCached", 0) * 1024,
            swap_devices=tuple(parse_swaps(swaps)),
        )
