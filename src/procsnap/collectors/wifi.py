"""
Wireless link collector.

Parses /proc/self/net/wireless::

    Inter-| sta-|   Quality        |   Discarded packets               | Missed | WE
     face | tus | link level noise |  nwid  crypt   frag  retry   misc | beacon | 22
     wlan0: 0000   70.  -40.  -256        0      0      0      0     12        0
"""

from __future__ import annotations

import re

from procsnap.collectors.base import BaseCollector
from procsnap.models import WifiLink
from procsnap.parsing import Parsed, ParseResult, Unparsable

WIRELESS_PATH = "/proc/self/net/wireless"

WIRELESS_RE = re.compile(
    r"^\s*(\S+):\s*(\d+)\s+(\S+)\s+(\S+)\s+(\S+)"
    r"\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s*$"
)


def _quality(value: str) -> float:
    # Values that are not updated carry a trailing "." or "*"
    return float(value.rstrip(".*"))


def parse_wireless_line(line: str) -> ParseResult[WifiLink]:
    match = WIRELESS_RE.match(line)
    if not match:
        return Unparsable("not an interface line", line)

    groups = match.groups()
    try:
        link, level, noise = (_quality(v) for v in groups[2:5])
    except ValueError:
        return Unparsable("link quality is not a number", line)

    nwid, crypt, frag, retry, misc, beacon = (int(v) for v in groups[5:])
    return Parsed(
        WifiLink(
            device=groups[0],
            status=groups[1],
            quality_link=link,
            quality_level=level,
            quality_noise=noise,
            discarded_nwid=nwid,
            discarded_crypt=crypt,
            discarded_frag=frag,
            discarded_retry=retry,
            discarded_misc=misc,
            missed_beacon=beacon,
        )
    )


class WifiCollector(BaseCollector):
    """Collects wireless link quality."""

    name = "wifi"
    description = "Wireless link quality and discard counters"
    field = "wifi"
    empty = ()

    def collect(self) -> tuple[WifiLink, ...]:
        contents = self.read_file(WIRELESS_PATH)
        if contents is None:
            self.report(f"{WIRELESS_PATH} does not exist")
            return self.empty

        links = []
        for line in contents.split("\n"):
            result = parse_wireless_line(line)
            if isinstance(result, Parsed):
                links.append(result.value)
        return tuple(links)
