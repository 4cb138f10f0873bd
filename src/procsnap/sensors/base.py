"""
Interface shared by the external temperature sources.
"""

from __future__ import annotations

import logging
import socket
from typing import Protocol, runtime_checkable

from procsnap.errors import CollaboratorFailure
from procsnap.models import TemperatureReading

logger = logging.getLogger(__name__)

RECV_SIZE = 4096


@runtime_checkable
class TemperatureSource(Protocol):
    """Something that can report temperatures, fans or voltages."""

    name: str

    def collect(self) -> list[TemperatureReading]:
        """
        Fetch current readings.

        Raises:
            CollaboratorFailure: The source is unreachable or its output
                cannot be parsed.
        """
        ...


def read_socket(source: str, host: str, port: int, timeout: float) -> str:
    """
    Read everything a line-oriented daemon sends on connect.

    Both hddtemp and mbmon write their report and close the connection.
    """
    try:
        with socket.create_connection((host, port), timeout=timeout) as sock:
            sock.settimeout(timeout)
            chunks = []
            while True:
                data = sock.recv(RECV_SIZE)
                if not data:
                    break
                chunks.append(data)
    except socket.timeout as e:
        raise CollaboratorFailure(source, f"timed out talking to {host}:{port}") from e
    except OSError as e:
        raise CollaboratorFailure(source, f"cannot connect to {host}:{port}: {e}") from e

    logger.debug(f"Read {sum(len(c) for c in chunks)} bytes from {source} at {host}:{port}")
    return b"".join(chunks).decode("utf-8", errors="replace")
