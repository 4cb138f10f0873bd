"""
Mount collector.

Parses /proc/mounts and probes each mount point for its capacity.
"""

from __future__ import annotations

import re
from typing import NamedTuple

import psutil

from procsnap.collectors.base import BaseCollector
from procsnap.models import MountEntry
from procsnap.parsing import Parsed, ParseResult, Unparsable

MOUNTS_PATH = "/proc/mounts"

# Anchoring on the trailing dump/pass pair keeps the four leading fields
# honest; spaces inside them are always escaped by the kernel.
MOUNT_LINE_RE = re.compile(r"^(\S+) (\S+) (\S+) (\S+) \d+ \d+$")
OCTAL_ESCAPE_RE = re.compile(r"\\([0-7]{1,3}|\\)")


class MountLine(NamedTuple):
    source: str
    mount: str
    fstype: str
    options: str


def unescape_octal(value: str) -> str:
    r"""Undo the kernel's octal escaping, e.g. ``/mnt/my\040disk``."""

    def _replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "\\":
            return "\\"
        return chr(int(token, 8))

    return OCTAL_ESCAPE_RE.sub(_replace, value)


def parse_mount_line(line: str) -> ParseResult[MountLine]:
    match = MOUNT_LINE_RE.match(line)
    if not match:
        return Unparsable("expected 6 space separated fields", line)
    return Parsed(MountLine(*match.groups()))


def percent(value: int | None, total: int | None) -> float | None:
    """
    Share of ``total`` as a whole percentage.

    None unless both values are known and non-zero, so a full filesystem has
    no free percentage and an empty one no used percentage.
    """
    if not value or not total:
        return None
    return float(round(value * 100 / total))


class MountCollector(BaseCollector):
    """Collects mounted filesystems with size and usage."""

    name = "mounts"
    description = "Mounted filesystems and their usage"
    field = "mounts"
    empty = ()

    def collect(self) -> tuple[MountEntry, ...]:
        contents = self.read_file(MOUNTS_PATH)
        if contents is None:
            self.report(f"{MOUNTS_PATH} does not exist")
            return self.empty

        hidden_devices = set(self.config.hide_storage_devices)
        hidden_filesystems = set(self.config.hide_filesystems)

        mounts = []
        for line in contents.split("\n"):
            result = parse_mount_line(line)
            if not isinstance(result, Parsed):
                if line.strip():
                    self.logger.debug(f"Skipping mount line: {line!r}")
                continue

            entry = result.value
            # Filter before probing to avoid needless statfs calls
            if entry.source in hidden_devices or entry.fstype in hidden_filesystems:
                continue

            mounts.append(self._entry(entry))

        return tuple(mounts)

    def _entry(self, line: MountLine) -> MountEntry:
        mount_point = unescape_octal(line.mount)
        size, free = self._probe_capacity(mount_point)
        used = size - free if size is not None and free is not None else None

        device = line.source
        if device.startswith("/") and self.reader.is_link(device):
            device = self.reader.realpath(device)

        return MountEntry(
            device=device,
            mount=mount_point,
            type=line.fstype,
            size=size,
            used=used,
            free=free,
            used_percent=percent(used, size),
            free_percent=percent(free, size),
        )

    def _probe_capacity(self, mount_point: str) -> tuple[int | None, int | None]:
        """Total and free bytes of the filesystem behind a mount point."""
        try:
            usage = psutil.disk_usage(self.reader.path(mount_point))
        except OSError as e:
            self.logger.debug(f"Could not get usage stats for {mount_point}: {e}")
            return None, None
        return usage.total, usage.free
