"""
Subsystem collectors for procsnap.

Each collector reads the pseudo-files of one subsystem and turns them into
typed records. The registry below maps subsystem names (the ``show_*``
configuration flags) to collector classes.
"""

from __future__ import annotations

from procsnap.collectors.base import BaseCollector
from procsnap.collectors.cpu import CpuCollector
from procsnap.collectors.devices import DeviceCollector
from procsnap.collectors.memory import MemoryCollector
from procsnap.collectors.mounts import MountCollector
from procsnap.collectors.network import NetworkCollector
from procsnap.collectors.power import BatteryCollector
from procsnap.collectors.raid import RaidCollector
from procsnap.collectors.storage import StorageCollector
from procsnap.collectors.system import (
    HostnameCollector,
    KernelCollector,
    LoadCollector,
    OsCollector,
    UptimeCollector,
)
from procsnap.collectors.temps import TemperatureCollector
from procsnap.collectors.wifi import WifiCollector

# Registry of all available collectors, in snapshot order
COLLECTORS: dict[str, type[BaseCollector]] = {
    "os": OsCollector,
    "kernel": KernelCollector,
    "hostname": HostnameCollector,
    "uptime": UptimeCollector,
    "load": LoadCollector,
    "ram": MemoryCollector,
    "cpu": CpuCollector,
    "hd": StorageCollector,
    "mounts": MountCollector,
    "devices": DeviceCollector,
    "temps": TemperatureCollector,
    "battery": BatteryCollector,
    "raid": RaidCollector,
    "network": NetworkCollector,
    "wifi": WifiCollector,
}


def get_all_collectors() -> dict[str, type[BaseCollector]]:
    """Return all registered collectors."""
    return COLLECTORS.copy()


def get_collector(name: str) -> type[BaseCollector] | None:
    """Get a specific collector by name."""
    return COLLECTORS.get(name)


def list_collectors() -> list[str]:
    """List all available collector names."""
    return list(COLLECTORS.keys())


__all__ = [
    "BaseCollector",
    "OsCollector",
    "KernelCollector",
    "HostnameCollector",
    "UptimeCollector",
    "LoadCollector",
    "MemoryCollector",
    "CpuCollector",
    "StorageCollector",
    "MountCollector",
    "DeviceCollector",
    "TemperatureCollector",
    "BatteryCollector",
    "RaidCollector",
    "NetworkCollector",
    "WifiCollector",
    "get_all_collectors",
    "get_collector",
    "list_collectors",
    "COLLECTORS",
]
