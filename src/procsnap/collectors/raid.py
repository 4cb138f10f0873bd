"""
Software RAID collector.

Parses /proc/mdstat. A typical record looks like::

    md1 : active raid5 sdd1[3](S) sdc1[2] sdb1[1] sda1[0](F)
          3906766848 blocks super 1.2 level 5, 512k chunk, algorithm 2 [3/2] [_UU]

Records that do not fit the pattern are left out. A record with a member
token that cannot be read is reported and left out rather than emitted
half-parsed. raid10 prints its layout, e.g. ``512K chunks 2 near-copies``,
where raid5 prints ``level 5, 512k chunk, algorithm 2``.
"""

from __future__ import annotations

import re

from procsnap.collectors.base import BaseCollector
from procsnap.models import RaidArray, RaidMember
from procsnap.parsing import Parsed, ParseResult, Unparsable

MDSTAT_PATH = "/proc/mdstat"

ALGORITHM = (
    r"level \d+, \w+ chunk, algorithm \d+"
    r"|\d+[kKmM] chunks(?: \d+ (?:near|far|offset)-copies)?"
)
ARRAY_RE = re.compile(
    r"^(\S+)\s*:\s*(\w+)(?:\s+\([\w-]+\))?\s*raid(\d+)\s*([\w\[\]() -]+?)\s*\n"
    r"\s+(\d+) blocks\s*(?:super \S+\s*)?"
    rf"((?:{ALGORITHM})\s*)?"
    r"\[(\d+)/(\d+)\] \[([U_]+)\]",
    re.MULTILINE | re.IGNORECASE,
)
MEMBER_RE = re.compile(r"^([\w-]+)\[\d+\]((?:\(\w+\))*)$")
FLAG_RE = re.compile(r"\(\w+\)")

def parse_member(token: str) -> ParseResult[RaidMember]:
    """
    Parse one ``name[slot](flag)...`` member token.

    A failed flag wins over a spare flag. Any other flag maps to
    ``unknown``.
    """
    match = MEMBER_RE.match(token)
    if not match:
        return Unparsable("expected name[slot](flag)", token)

    flags = FLAG_RE.findall(match.group(2))
    if not flags:
        state = "normal"
    elif "(F)" in flags:
        state = "failed"
    elif "(S)" in flags:
        state = "spare"
    else:
        state = "unknown"
    return Parsed(RaidMember(drive=f"/dev/{match.group(1)}", state=state))


def parse_array(match: re.Match[str]) -> ParseResult[RaidArray]:
    """Build one array from an ``ARRAY_RE`` match, or nothing if a member is bad."""
    name, status, level, members, blocks, algorithm, total, active, chart = match.groups()

    drives = []
    for token in members.split():
        member = parse_member(token)
        if not isinstance(member, Parsed):
            return Unparsable(f"bad member {token!r} in /dev/{name}", match.group(0))
        drives.append(member.value)

    return Parsed(
        RaidArray(
            device=f"/dev/{name}",
            status=status,
            level=level,
            drives=tuple(drives),
            blocks=int(blocks),
            algorithm=(algorithm or "").strip(),
            total_count=int(total),
            active_count=int(active),
            chart=chart,
        )
    )


def parse_mdstat_records(text: str) -> list[ParseResult[RaidArray]]:
    return [parse_array(match) for match in ARRAY_RE.finditer(text)]


def parse_mdstat(text: str) -> list[RaidArray]:
    """Arrays whose record and members all parsed."""
    return [r.value for r in parse_mdstat_records(text) if isinstance(r, Parsed)]


class RaidCollector(BaseCollector):
    """Collects Linux md software RAID arrays."""

    name = "raid"
    description = "Software RAID arrays from /proc/mdstat"
    field = "raid"
    empty = ()

    def collect(self) -> tuple[RaidArray, ...]:
        if not self.config.raid_mdadm:
            return self.empty

        contents = self.read_file(MDSTAT_PATH)
        if contents is None:
            self.report(f"{MDSTAT_PATH} does not exist.")
            return self.empty

        arrays = []
        for record in parse_mdstat_records(contents):
            if isinstance(record, Parsed):
                arrays.append(record.value)
            else:
                self.report(f"Error parsing {MDSTAT_PATH}: {record.reason}")
        return tuple(arrays)
