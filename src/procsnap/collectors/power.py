"""
Battery collector.

Reads charge levels from /sys/class/power_supply/BAT*. Batteries that
report energy (uWh) instead of charge (uAh) are read from the energy
files.
"""

from __future__ import annotations

from procsnap.collectors.base import BaseCollector
from procsnap.models import BatteryInfo

BATTERY_GLOB = "/sys/class/power_supply/BAT*"


def charge_percentage(now: int, full: int) -> str:
    """Charge as ``"87.5%"``, or ``"?%"`` when either value is missing."""
    if now == 0 or full == 0:
        return "?%"
    return f"{round(now * 100 / full, 2):g}%"


class BatteryCollector(BaseCollector):
    """Collects battery charge and state."""

    name = "battery"
    description = "Battery charge and state"
    field = "batteries"
    empty = ()

    def collect(self) -> tuple[BatteryInfo, ...]:
        return tuple(self._battery(path) for path in self.reader.glob(BATTERY_GLOB))

    def _battery(self, path: str) -> BatteryInfo:
        if self.reader.exists(f"{path}/charge_full"):
            prefix = "charge"
        else:
            prefix = "energy"
        full = self.reader.read_int(f"{path}/{prefix}_full")
        now = self.reader.read_int(f"{path}/{prefix}_now")

        manufacturer = self.read_file(f"{path}/manufacturer", "")
        model = self.read_file(f"{path}/model_name", "Unknown")

        return BatteryInfo(
            charge_full=full,
            charge_now=now,
            percentage=charge_percentage(now, full),
            device=f"{manufacturer} {model}".strip(),
            state=self.read_file(f"{path}/status", "Unknown"),
        )
