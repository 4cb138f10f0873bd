"""
Network interface collector.

Reads state, bus type and traffic counters for every interface under
/sys/class/net.
"""

from __future__ import annotations

import posixpath

from procsnap.collectors.base import BaseCollector
from procsnap.models import NetCounters, NetInterface

NET_GLOB = "/sys/class/net/*"

OPER_STATES = {"up", "down", "unknown"}
BUS_TYPES = {"PCI", "USB"}


def classify_state(operstate: str) -> str:
    return operstate if operstate in OPER_STATES else "unknown"


def classify_type(modalias: str) -> str:
    """Bus of an interface from its modalias, e.g. ``pci:v00008086d...``."""
    bus = modalias.upper().split(":", 1)[0]
    return bus if bus in BUS_TYPES else "N/A"


class NetworkCollector(BaseCollector):
    """Collects network interface state and traffic counters."""

    name = "network"
    description = "Network interfaces, state and traffic counters"
    field = "network"
    empty = ()

    def collect(self) -> tuple[NetInterface, ...]:
        if not self.reader.is_dir("/sys/class/net"):
            self.report("/sys/class/net does not exist")
            return self.empty

        return tuple(self._interface(path) for path in self.reader.glob(NET_GLOB))

    def _interface(self, path: str) -> NetInterface:
        return NetInterface(
            name=posixpath.basename(path),
            state=classify_state(self.read_file(f"{path}/operstate", "")),
            type=classify_type(self.read_file(f"{path}/device/modalias", "")),
            received=self._counters(path, "rx"),
            sent=self._counters(path, "tx"),
        )

    def _counters(self, path: str, direction: str) -> NetCounters:
        stats = f"{path}/statistics/{direction}"
        return NetCounters(
            bytes=self.reader.read_int(f"{stats}_bytes"),
            errors=self.reader.read_int(f"{stats}_errors"),
            packets=self.reader.read_int(f"{stats}_packets"),
        )
