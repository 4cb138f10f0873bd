"""
System information collectors.

OS, kernel version, hostname, uptime and load average. Each is a separate
subsystem so it can be switched off on its own.
"""

from __future__ import annotations

import math
import re

import distro

from procsnap.collectors.base import BaseCollector
from procsnap.errors import SourceUnparsable
from procsnap.formatting import seconds_convert
from procsnap.models import LoadAverage, OsInfo, Uptime
from procsnap.parsing import Parsed, ParseResult, Unparsable

KERNEL_RE = re.compile(r"^Linux version (\S+)")


def parse_kernel_version(text: str) -> ParseResult[str]:
    """Extract the release from a /proc/version line."""
    match = KERNEL_RE.match(text)
    if not match:
        return Unparsable("expected 'Linux version <release> ...'", text)
    return Parsed(match.group(1))


def parse_loadavg(text: str) -> ParseResult[LoadAverage]:
    """Parse the three load averages from /proc/loadavg."""
    parts = text.split()
    if len(parts) < 3:
        return Unparsable("expected three load averages", text)
    try:
        return Parsed(LoadAverage(float(parts[0]), float(parts[1]), float(parts[2])))
    except ValueError:
        return Unparsable("load averages are not numbers", text)


def parse_uptime(text: str) -> ParseResult[int]:
    """Whole seconds since boot, rounded up."""
    parts = text.split()
    if not parts:
        return Unparsable("empty uptime", text)
    try:
        return Parsed(int(math.ceil(float(parts[0]))))
    except ValueError:
        return Unparsable("uptime is not a number", text)


class OsCollector(BaseCollector):
    """Identifies the operating system and distribution."""

    name = "os"
    description = "Operating system and distribution"
    field = "os"
    empty = None

    def collect(self) -> OsInfo:
        return OsInfo(
            name="Linux",
            distribution=distro.name(pretty=True),
            distribution_id=distro.id(),
            distribution_version=distro.version(),
        )


class KernelCollector(BaseCollector):
    """Kernel release from /proc/version."""

    name = "kernel"
    description = "Linux kernel release"
    field = "kernel"
    empty = ""

    def collect(self) -> str:
        contents = self.read_file("/proc/version")
        if contents is None:
            self.report("/proc/version not found")
            return self.empty

        result = parse_kernel_version(contents)
        if not isinstance(result, Parsed):
            self.report(str(SourceUnparsable("/proc/version", result.reason)))
            return self.empty
        return result.value


class HostnameCollector(BaseCollector):
    name = "hostname"
    description = "Host name"
    field = "hostname"
    empty = ""

    def collect(self) -> str:
        hostname = self.read_file("/proc/sys/kernel/hostname")
        if hostname is None:
            self.report("Error getting /proc/sys/kernel/hostname")
            return self.empty
        return hostname


class UptimeCollector(BaseCollector):
    name = "uptime"
    description = "Time since boot"
    field = "uptime"
    empty = None

    def collect(self) -> Uptime | None:
        contents = self.read_file("/proc/uptime")
        if not contents:
            self.report("/proc/uptime does not exist.")
            return self.empty

        result = parse_uptime(contents)
        if not isinstance(result, Parsed):
            self.report(str(SourceUnparsable("/proc/uptime", result.reason)))
            return self.empty
        return Uptime(seconds=result.value, text=seconds_convert(result.value))


class LoadCollector(BaseCollector):
    name = "load"
    description = "1, 5 and 15 minute load averages"
    field = "load"
    empty = None

    def collect(self) -> LoadAverage | None:
        contents = self.read_file("/proc/loadavg")
        if contents is None:
            self.report("/proc/loadavg unreadable")
            return self.empty

        result = parse_loadavg(contents)
        if not isinstance(result, Parsed):
            self.report(str(SourceUnparsable("/proc/loadavg", result.reason)))
            return self.empty
        return result.value
