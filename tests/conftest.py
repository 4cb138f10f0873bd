"""
Pytest fixtures and configuration for procsnap tests.

Provides sample pseudo-file contents and a fake filesystem root that the
collectors can read instead of the live /proc and /sys.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from procsnap.config import Config
from procsnap.diagnostics import DiagnosticSink
from procsnap.reader import PseudoFileReader


class FakeRoot:
    """A directory tree standing in for /, with /proc and /sys."""

    def __init__(self, base: Path):
        self.base = base
        (base / "proc").mkdir(parents=True, exist_ok=True)
        (base / "sys").mkdir(parents=True, exist_ok=True)

    def write(self, logical: str, content: str) -> Path:
        path = self.base / logical.lstrip("/")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    def mkdir(self, logical: str) -> Path:
        path = self.base / logical.lstrip("/")
        path.mkdir(parents=True, exist_ok=True)
        return path

    def symlink(self, logical: str, target: str) -> Path:
        path = self.base / logical.lstrip("/")
        path.parent.mkdir(parents=True, exist_ok=True)
        os.symlink(target, path)
        return path

    @property
    def root(self) -> str:
        return str(self.base)


class RecordingReader(PseudoFileReader):
    """PseudoFileReader that remembers every path it touched."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: list[str] = []

    def path(self, logical: str) -> str:
        self.calls.append(logical)
        return super().path(logical)

    def touched(self, prefix: str) -> bool:
        return any(call.startswith(prefix) for call in self.calls)


@pytest.fixture
def fake_root(tmp_path) -> FakeRoot:
    """Empty fake root with /proc and /sys directories."""
    return FakeRoot(tmp_path / "root")


@pytest.fixture
def reader(fake_root) -> PseudoFileReader:
    return PseudoFileReader(fake_root.root)


@pytest.fixture
def recording_reader(fake_root) -> RecordingReader:
    return RecordingReader(fake_root.root)


@pytest.fixture
def populated_root(
    fake_root,
    sample_meminfo,
    sample_swaps,
    sample_cpuinfo,
    sample_mdstat,
    sample_wireless,
    sample_pci_ids,
    sample_usb_ids,
) -> FakeRoot:
    """Fake root with every pseudo-file the collectors read."""
    fake_root.write("/proc/version", "Linux version 6.1.0-18-amd64 (debian-kernel@lists)\n")
    fake_root.write("/proc/sys/kernel/hostname", "snapbox\n")
    fake_root.write("/proc/uptime", "3661.50 7000.00\n")
    fake_root.write("/proc/loadavg", "0.10 0.20 0.30 1/100 999\n")
    fake_root.write("/proc/meminfo", sample_meminfo)
    fake_root.write("/proc/swaps", sample_swaps)
    fake_root.write("/proc/cpuinfo", sample_cpuinfo)
    fake_root.write("/proc/mdstat", sample_mdstat)
    fake_root.write("/proc/mounts", "/dev/sda1 / ext4 rw,relatime 0 1\n")
    fake_root.write("/proc/self/net/wireless", sample_wireless)
    fake_root.write("/sys/block/sda/device/model", "Samsung SSD 860\n")
    fake_root.write("/sys/block/sda/device/vendor", "ATA\n")
    fake_root.write("/sys/block/sda/stat", "1 0 0 0 2 0 0 0 0 0 0\n")
    fake_root.write("/sys/block/sda/removable", "0\n")
    fake_root.write("/sys/bus/pci/devices/0000:00:00.0/uevent", "PCI_ID=8086:0044\n")
    fake_root.write("/sys/bus/usb/devices/usb1/uevent", "PRODUCT=1d6b/2/510\n")
    fake_root.write("/usr/share/misc/pci.ids", sample_pci_ids)
    fake_root.write("/usr/share/misc/usb.ids", sample_usb_ids)
    fake_root.write("/sys/class/net/eth0/operstate", "up\n")
    fake_root.write("/sys/class/net/eth0/device/modalias", "pci:v00008086d000015BB\n")
    fake_root.write("/sys/class/net/eth0/statistics/rx_bytes", "4096\n")
    fake_root.write("/sys/class/net/eth0/statistics/tx_packets", "7\n")
    fake_root.write("/sys/class/power_supply/BAT0/charge_full", "100\n")
    fake_root.write("/sys/class/power_supply/BAT0/charge_now", "40\n")
    fake_root.write("/sys/class/power_supply/BAT0/status", "Charging\n")
    return fake_root


@pytest.fixture
def sink() -> DiagnosticSink:
    return DiagnosticSink()


@pytest.fixture
def config(fake_root) -> Config:
    return Config(root=fake_root.root)


# Test Data Fixtures - Pseudo-file contents
@pytest.fixture
def sample_meminfo():
    """Sample /proc/meminfo."""
    return """MemTotal:       16303440 kB
MemFree:         1234568 kB
MemAvailable:    9876544 kB
Buffers:          456784 kB
Cached:          6543212 kB
SwapCached:         1024 kB
Active:          7654320 kB
SwapTotal:       8388604 kB
SwapFree:        8380000 kB
HugePages_Total:       0
Hugepagesize:       2048 kB
"""


@pytest.fixture
def sample_swaps():
    """Sample /proc/swaps."""
    return (
        "Filename\t\t\t\tType\t\tSize\t\tUsed\t\tPriority\n"
        "/dev/nvme0n1p2                          partition\t8388604\t\t8604\t\t-2\n"
        "/swapfile                               file\t\t1048572\t\t0\t\t-3\n"
    )


@pytest.fixture
def sample_cpuinfo():
    """Two-processor /proc/cpuinfo with a trailing blank line."""
    return """processor\t: 0
vendor_id\t: GenuineIntel
cpu family\t: 6
model name\t: Intel(R) Core(TM) i7-8565U CPU @ 1.80GHz
cpu MHz\t\t: 1992.002
flags\t\t: fpu vme de pse

processor\t: 1
vendor_id\t: GenuineIntel
cpu family\t: 6
model name\t: Intel(R) Core(TM) i7-8565U CPU @ 1.80GHz
cpu MHz\t\t: 2100.000
flags\t\t: fpu vme de pse

"""


@pytest.fixture
def sample_mdstat():
    """Sample /proc/mdstat with a mirror and a degraded raid5 with a spare."""
    return """Personalities : [raid1] [raid6] [raid5] [raid4]
md0 : active raid1 sdb1[1] sda1[0]
      1048512 blocks [2/2] [UU]

md1 : active raid5 sdd2[3](S) sdc2[2] sdb2[1] sda2[0](F)
      3906766848 blocks super 1.2 level 5, 512k chunk, algorithm 2 [3/2] [_UU]
      bitmap: 2/15 pages [8KB], 65536KB chunk

unused devices: <none>
"""


@pytest.fixture
def sample_mounts():
    """Sample /proc/mounts."""
    return """sysfs /sys sysfs rw,nosuid,nodev,noexec,relatime 0 0
proc /proc proc rw,nosuid,nodev,noexec,relatime 0 0
/dev/sda1 / ext4 rw,relatime 0 1
/dev/sdb1 /mnt/my\\040disk ext4 rw,relatime 0 2
tmpfs /run tmpfs rw,nosuid,nodev,mode=755 0 0
"""


@pytest.fixture
def sample_wireless():
    """Sample /proc/self/net/wireless."""
    return """Inter-| sta-|   Quality        |   Discarded packets               | Missed | WE
 face | tus | link level noise |  nwid  crypt   frag  retry   misc | beacon | 22
 wlan0: 0000   70.  -40.  -256        0      0      0      3     12        0
"""


@pytest.fixture
def sample_pci_ids():
    """Excerpt of a pci.ids database."""
    return """#
#\tList of PCI ID's
#
1022  Advanced Micro Devices, Inc. [AMD]
\t1480  Starship/Matisse Root Complex
\t1481  Starship/Matisse IOMMU
8086  Intel Corporation
\t0044  Core Processor DRAM Controller
\t15bb  Ethernet Connection (7) I219-LM
\t\t1028 0907  Ethernet Connection (7) I219-LM
\t9dd3  Cannon Point-LP SATA Controller [AHCI Mode]
10de  NVIDIA Corporation
\t1c82  GP107 [GeForce GTX 1050 Ti]
C 00  Unclassified device
\t00  Non-VGA unclassified device
"""


@pytest.fixture
def sample_usb_ids():
    """Excerpt of a usb.ids database."""
    return """#
# List of USB ID's
#
001a  Example Vendor
\t001a  Example Widget
1d6b  Linux Foundation
\t0002  2.0 root hub
\t0003  3.0 root hub
046d  Logitech, Inc.
\tc52b  Unifying Receiver
"""


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "cli: marks tests as CLI tests")
