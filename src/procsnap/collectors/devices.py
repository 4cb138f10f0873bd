"""
PCI and USB device collector.

Hardware ids are discovered from the sysfs ``uevent`` files, then named by
streaming the pci.ids / usb.ids databases. Both databases list an
unindented ``vendor-id  vendor name`` line followed by tab-indented
``device-id  device name`` lines. Scanning stops as soon as every
discovered id has been named, which usually happens long before the end
of the file.
"""

from __future__ import annotations

import re
from typing import Iterable

from procsnap.collectors.base import BaseCollector
from procsnap.errors import SourceUnavailable
from procsnap.models import HardwareDevice
from procsnap.reader import PseudoFileReader

PCI_UEVENT_GLOB = "/sys/bus/pci/devices/*/uevent"
USB_UEVENT_GLOB = "/sys/bus/usb/devices/*/uevent"

PCI_ID_RE = re.compile(r"pci_(?:subsys_)?id=(\w+):(\w+)")
USB_PRODUCT_RE = re.compile(r"^product=([^/]+)/([^/]+)/[^\n]+$", re.MULTILINE)

VENDOR_LINE_RE = re.compile(r"^(\S{4})  (.+)$")
DEVICE_LINE_RE = re.compile(r"^\t(\S{4})  (.+)$")

# {vendor id: {device id, ...}}
IdSet = dict[str, set[str]]


def discover_pci(reader: PseudoFileReader) -> IdSet:
    """Vendor/device ids of every PCI device in sysfs."""
    found: IdSet = {}
    for path in reader.glob(PCI_UEVENT_GLOB):
        match = PCI_ID_RE.search((reader.read(path) or "").lower())
        if match:
            found.setdefault(match.group(1), set()).add(match.group(2))
    return found


def discover_usb(reader: PseudoFileReader) -> IdSet:
    """
    Vendor/product ids of every USB device in sysfs.

    The uevent file prints them as hex without leading zeros, so each is
    padded to the four digits used by usb.ids.
    """
    found: IdSet = {}
    for path in reader.glob(USB_UEVENT_GLOB):
        match = USB_PRODUCT_RE.search((reader.read(path) or "").lower())
        if match:
            vendor = match.group(1).zfill(4)
            product = match.group(2).zfill(4)
            found.setdefault(vendor, set()).add(product)
    return found


def count_ids(ids: IdSet) -> int:
    return sum(len(devices) for devices in ids.values())


def resolve_ids(lines: Iterable[str], wanted: IdSet, bus: str) -> list[HardwareDevice]:
    """
    Name the wanted ids from a vendor database.

    Args:
        lines: Database lines, consumed lazily.
        wanted: Ids to look for. Not modified.
        bus: Bus label put on every device, ``PCI`` or ``USB``.

    Returns:
        Resolved devices in database order. Ids that the database does not
        know are left out.
    """
    pending = {vendor: set(devices) for vendor, devices in wanted.items()}
    left = count_ids(pending)
    resolved: list[HardwareDevice] = []
    if left == 0:
        return resolved

    vendor_id = vendor_name = None
    for line in lines:
        line = line.rstrip("\r\n")

        vendor_match = VENDOR_LINE_RE.match(line)
        if vendor_match:
            vendor_id = vendor_match.group(1).lower()
            vendor_name = vendor_match.group(2).strip()
            continue

        device_match = DEVICE_LINE_RE.match(line)
        if not device_match or vendor_id not in pending:
            continue

        device_id = device_match.group(1).lower()
        if device_id in pending[vendor_id]:
            pending[vendor_id].discard(device_id)
            resolved.append(HardwareDevice(vendor_name, device_match.group(2).strip(), bus))
            left -= 1
            if left == 0:
                break

    return resolved


class DeviceCollector(BaseCollector):
    """Collects named PCI and USB devices."""

    name = "devices"
    description = "PCI and USB devices named from the vendor databases"
    field = "devices"
    empty = ()

    def collect(self) -> tuple[HardwareDevice, ...]:
        devices = self._resolve("PCI", discover_pci(self.reader), self.config.pci_ids_path)
        devices += self._resolve("USB", discover_usb(self.reader), self.config.usb_ids_path)
        return tuple(devices)

    def _resolve(self, bus: str, wanted: IdSet, database: str) -> list[HardwareDevice]:
        total = count_ids(wanted)
        if total == 0:
            return []

        try:
            lines = self.reader.lines(database)
        except SourceUnavailable as e:
            self.report(f"Cannot open {bus} id database {database}: {e.reason}")
            return []

        try:
            devices = resolve_ids(lines, wanted, bus)
        finally:
            lines.close()

        self.logger.debug(f"Named {len(devices)} of {total} {bus} ids from {database}")
        return devices
