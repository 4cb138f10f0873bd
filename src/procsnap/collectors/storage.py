"""
Block device collector.

Enumerates disks through /sys/block/*/device/model and reads their I/O
counters from the sibling stat file.
"""

from __future__ import annotations

import posixpath

from procsnap.collectors.base import BaseCollector
from procsnap.models import BlockDevice
from procsnap.parsing import Parsed, ParseResult, Unparsable

MODEL_GLOB = "/sys/block/*/device/model"

# The classic layout has 11 fields; 4.18 added 4 discard fields and 5.5
# two flush fields, all appended after the original ones.
STAT_FIELD_COUNTS = (11, 15, 17)


def parse_block_stat(text: str) -> ParseResult[tuple[int, int]]:
    """Completed reads and writes (fields 1 and 5) from a block stat line."""
    fields = text.split()
    if len(fields) not in STAT_FIELD_COUNTS or not all(f.isdigit() for f in fields):
        return Unparsable(f"expected {STAT_FIELD_COUNTS[0]} numeric fields", text)
    return Parsed((int(fields[0]), int(fields[4])))


class StorageCollector(BaseCollector):
    """Collects disk model, vendor and I/O counters."""

    name = "hd"
    description = "Disk drives and their I/O counters"
    field = "disks"
    empty = ()

    def collect(self) -> tuple[BlockDevice, ...]:
        if not self.reader.is_dir("/sys/block"):
            self.report("/sys/block does not exist")
            return self.empty

        return tuple(self._device(path) for path in self.reader.glob(MODEL_GLOB))

    def _device(self, model_path: str) -> BlockDevice:
        device_dir = posixpath.dirname(model_path)
        block_dir = posixpath.dirname(device_dir)
        # /sys/block/<name>/device/model
        node = model_path.split("/")[3]

        stat = parse_block_stat(self.read_file(f"{block_dir}/stat", ""))
        if isinstance(stat, Parsed):
            reads, writes = stat.value
        else:
            self.logger.debug(f"Unexpected stat format for {node}: {stat.reason}")
            reads, writes = None, None

        return BlockDevice(
            name=self.read_file(model_path, "Unknown"),
            vendor=self.read_file(f"{device_dir}/vendor", "Unknown"),
            device=f"/dev/{node}",
            removable=self.read_file(f"{block_dir}/removable", "0") == "1",
            reads=reads,
            writes=writes,
        )
