"""
Typed records produced by the collectors, and the Snapshot that holds them.

Everything here is immutable: records are frozen dataclasses and
collections are tuples. ``None`` marks an unknown numeric value.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from procsnap.diagnostics import Diagnostic

UNKNOWN = "unknown"


@dataclass(frozen=True)
class OsInfo:
    name: str = "Linux"
    distribution: str = ""
    distribution_id: str = ""
    distribution_version: str = ""


@dataclass(frozen=True)
class Uptime:
    seconds: int
    text: str


@dataclass(frozen=True)
class LoadAverage:
    now: float
    five_min: float
    fifteen_min: float

    def to_dict(self) -> dict[str, float]:
        return {"now": self.now, "5min": self.five_min, "15min": self.fifteen_min}


@dataclass(frozen=True)
class SwapDevice:
    device: str
    type: str
    size: int
    used: int


@dataclass(frozen=True)
class MemoryInfo:
    """Physical and swap memory, in bytes."""

    total: int
    free: int
    swap_total: int
    swap_free: int
    swap_cached: int
    swap_devices: tuple[SwapDevice, ...] = ()


@dataclass(frozen=True)
class CpuRecord:
    """One logical processor."""

    vendor: str = UNKNOWN
    model: str = UNKNOWN
    mhz: float | None = None


@dataclass(frozen=True)
class BlockDevice:
    name: str
    vendor: str
    device: str
    removable: bool
    reads: int | None
    writes: int | None


@dataclass(frozen=True)
class MountEntry:
    device: str
    mount: str
    type: str
    size: int | None
    used: int | None
    free: int | None
    used_percent: float | None
    free_percent: float | None


@dataclass(frozen=True)
class HardwareDevice:
    vendor: str
    device: str
    bus: str


@dataclass(frozen=True)
class RaidMember:
    drive: str
    state: str


@dataclass(frozen=True)
class RaidArray:
    """A Linux software RAID array as listed in /proc/mdstat."""

    device: str
    status: str
    level: str
    drives: tuple[RaidMember, ...]
    blocks: int
    algorithm: str
    total_count: int
    active_count: int
    chart: str

    @property
    def count(self) -> str:
        return f"{self.total_count}/{self.active_count}"

    @property
    def degraded(self) -> bool:
        return "_" in self.chart


@dataclass(frozen=True)
class NetCounters:
    bytes: int = 0
    errors: int = 0
    packets: int = 0


@dataclass(frozen=True)
class NetInterface:
    name: str
    state: str
    type: str
    received: NetCounters
    sent: NetCounters


@dataclass(frozen=True)
class BatteryInfo:
    charge_full: int
    charge_now: int
    percentage: str
    device: str
    state: str


@dataclass(frozen=True)
class WifiLink:
    device: str
    status: str
    quality_link: float
    quality_level: float
    quality_noise: float
    discarded_nwid: int
    discarded_crypt: int
    discarded_frag: int
    discarded_retry: int
    discarded_misc: int
    missed_beacon: int


@dataclass(frozen=True)
class TemperatureReading:
    source: str
    path: str
    name: str
    temp: float
    unit: str


@dataclass(frozen=True)
class Snapshot:
    """
    The complete result of one collection pass.

    A disabled or unreadable subsystem keeps its empty value: ``""`` for
    strings, ``None`` for single records and ``()`` for sequences.
    """

    timestamp: str
    procsnap_version: str
    os: OsInfo | None = None
    kernel: str = ""
    hostname: str = ""
    uptime: Uptime | None = None
    load: LoadAverage | None = None
    memory: MemoryInfo | None = None
    cpus: tuple[CpuRecord, ...] = ()
    disks: tuple[BlockDevice, ...] = ()
    mounts: tuple[MountEntry, ...] = ()
    devices: tuple[HardwareDevice, ...] = ()
    temps: tuple[TemperatureReading, ...] = ()
    batteries: tuple[BatteryInfo, ...] = ()
    raid: tuple[RaidArray, ...] = ()
    network: tuple[NetInterface, ...] = ()
    wifi: tuple[WifiLink, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to dictionary for serialization."""
        data = asdict(self)
        data["load"] = self.load.to_dict() if self.load else None
        data["raid"] = [
            {**asdict(array), "count": array.count, "degraded": array.degraded}
            for array in self.raid
        ]
        meta = {
            "timestamp": data.pop("timestamp"),
            "procsnap_version": data.pop("procsnap_version"),
        }
        diagnostics = list(data.pop("diagnostics"))
        return {"meta": meta, "data": data, "diagnostics": diagnostics}

    def to_json(self, indent: int = 2) -> str:
        """Serialize snapshot to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)
