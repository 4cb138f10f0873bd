"""
Unit tests for the snapshot records and their serialization.
"""

from __future__ import annotations

import json
from dataclasses import FrozenInstanceError

import pytest

from procsnap.diagnostics import Diagnostic
from procsnap.models import (
    CpuRecord,
    LoadAverage,
    MountEntry,
    RaidArray,
    RaidMember,
    Snapshot,
)


def make_snapshot(**kwargs):
    return Snapshot(timestamp="2024-01-01T00:00:00+00:00", procsnap_version="0.3.0", **kwargs)


class TestRecords:
    def test_records_are_frozen(self):
        cpu = CpuRecord("GenuineIntel", "Xeon", 2400.0)
        with pytest.raises(FrozenInstanceError):
            cpu.mhz = 3000.0

    def test_cpu_defaults(self):
        assert CpuRecord() == CpuRecord("unknown", "unknown", None)

    def test_raid_count_and_degraded(self):
        array = RaidArray(
            device="/dev/md1",
            status="active",
            level="5",
            drives=(RaidMember("/dev/sda1", "failed"),),
            blocks=100,
            algorithm="",
            total_count=3,
            active_count=2,
            chart="_UU",
        )
        assert array.count == "3/2"
        assert array.degraded

    def test_load_average_keys(self):
        assert LoadAverage(1.5, 1.0, 0.5).to_dict() == {"now": 1.5, "5min": 1.0, "15min": 0.5}


class TestSnapshot:
    def test_empty_values(self):
        snapshot = make_snapshot()

        assert snapshot.kernel == ""
        assert snapshot.memory is None
        assert snapshot.cpus == ()
        assert snapshot.diagnostics == ()

    def test_to_dict_layout(self):
        snapshot = make_snapshot(
            kernel="6.1.0",
            load=LoadAverage(0.1, 0.2, 0.3),
            mounts=(MountEntry("/dev/sda1", "/", "ext4", 1000, 750, 250, 75.0, 25.0),),
            raid=(
                RaidArray("/dev/md0", "active", "1", (), 10, "", 2, 2, "UU"),
            ),
            diagnostics=(Diagnostic("wifi", "/proc/self/net/wireless does not exist"),),
        )

        result = snapshot.to_dict()

        assert set(result) == {"meta", "data", "diagnostics"}
        assert result["meta"] == {
            "timestamp": "2024-01-01T00:00:00+00:00",
            "procsnap_version": "0.3.0",
        }
        data = result["data"]
        assert data["kernel"] == "6.1.0"
        assert data["load"] == {"now": 0.1, "5min": 0.2, "15min": 0.3}
        assert data["mounts"][0]["used_percent"] == 75.0
        assert data["raid"][0]["count"] == "2/2"
        assert data["raid"][0]["degraded"] is False
        assert data["memory"] is None
        assert result["diagnostics"] == [
            {"subsystem": "wifi", "message": "/proc/self/net/wireless does not exist"}
        ]

    def test_to_json(self):
        parsed = json.loads(make_snapshot(hostname="box").to_json())

        assert parsed["data"]["hostname"] == "box"
        assert parsed["data"]["cpus"] == []
