"""
Unit tests for NetworkCollector.
"""

from __future__ import annotations

from procsnap.collectors.network import NetworkCollector, classify_state, classify_type
from procsnap.models import NetCounters


def write_interface(fake_root, name, operstate="up", modalias=None, rx=(0, 0, 0), tx=(0, 0, 0)):
    base = f"/sys/class/net/{name}"
    fake_root.write(f"{base}/operstate", f"{operstate}\n")
    if modalias is not None:
        fake_root.write(f"{base}/device/modalias", f"{modalias}\n")
    for direction, values in (("rx", rx), ("tx", tx)):
        for counter, value in zip(("bytes", "errors", "packets"), values):
            fake_root.write(f"{base}/statistics/{direction}_{counter}", f"{value}\n")


class TestClassifiers:
    def test_state(self):
        assert classify_state("up") == "up"
        assert classify_state("down") == "down"
        assert classify_state("dormant") == "unknown"
        assert classify_state("") == "unknown"

    def test_type(self):
        assert classify_type("pci:v00008086d000015BBsv00001028") == "PCI"
        assert classify_type("usb:v0BDAp8153d3000") == "USB"
        assert classify_type("platform:bcm2835") == "N/A"
        assert classify_type("") == "N/A"


class TestNetworkCollector:
    """Test NetworkCollector class."""

    def test_collect(self, fake_root, reader, sink):
        write_interface(
            fake_root,
            "enp0s31f6",
            modalias="pci:v00008086d000015BB",
            rx=(1000, 1, 10),
            tx=(2000, 2, 20),
        )
        write_interface(fake_root, "lo", operstate="unknown")

        eth, lo = NetworkCollector(reader, sink).collect()

        assert eth.name == "enp0s31f6"
        assert eth.state == "up"
        assert eth.type == "PCI"
        assert eth.received == NetCounters(1000, 1, 10)
        assert eth.sent == NetCounters(2000, 2, 20)
        assert lo.type == "N/A"
        assert lo.state == "unknown"
        assert not sink

    def test_sent_packets_come_from_tx(self, fake_root, reader, sink):
        write_interface(fake_root, "wlan0", rx=(0, 0, 111), tx=(0, 0, 222))

        (iface,) = NetworkCollector(reader, sink).collect()

        assert iface.received.packets == 111
        assert iface.sent.packets == 222

    def test_missing_counters_are_zero(self, fake_root, reader, sink):
        fake_root.write("/sys/class/net/dummy0/operstate", "down\n")

        (iface,) = NetworkCollector(reader, sink).collect()

        assert iface.received == NetCounters()
        assert iface.sent == NetCounters()

    def test_missing_sys_class_net(self, reader, sink):
        assert NetworkCollector(reader, sink).collect() == ()
        assert sink.for_subsystem("network")[0].message == "/sys/class/net does not exist"
