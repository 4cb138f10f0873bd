"""
Safe access to kernel pseudo-files.

Every filesystem access made by the collectors goes through a
PseudoFileReader. Paths are always given in their logical form
(``/proc/meminfo``) and mapped under the configured root, which lets a
snapshot be taken from a captured tree as easily as from the live host.
"""

from __future__ import annotations

import glob as globmod
import logging
import os
from typing import IO, Iterator

from procsnap.errors import SourceUnavailable

logger = logging.getLogger(__name__)

# Pseudo-files report a size of 0 or 4096 regardless of their content, so
# reads go until EOF and are only capped by this limit.
DEFAULT_MAX_BYTES = 4 * 1024 * 1024
CHUNK_SIZE = 64 * 1024


class PseudoFileReader:
    """Reads /proc and /sys style files below a filesystem root."""

    def __init__(self, root: str = "/", max_bytes: int = DEFAULT_MAX_BYTES):
        self.root = os.path.abspath(root or "/")
        self.max_bytes = max_bytes

    def path(self, logical: str) -> str:
        """Map a logical absolute path onto the host filesystem."""
        if self.root == "/":
            return logical
        return os.path.join(self.root, logical.lstrip("/"))

    def logical(self, host_path: str) -> str:
        """Inverse of path(): strip the root from a host path."""
        if self.root == "/":
            return host_path
        rel = os.path.relpath(host_path, self.root)
        if rel == ".":
            return "/"
        return "/" + rel

    def exists(self, path: str) -> bool:
        return os.path.exists(self.path(path))

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(self.path(path))

    def is_link(self, path: str) -> bool:
        return os.path.islink(self.path(path))

    def realpath(self, path: str) -> str:
        """Absolute, symlink-free logical path."""
        if self.root == "/":
            return os.path.realpath(path)
        # Resolve link by link so absolute targets stay inside the root.
        current = self.path(path)
        for _ in range(40):
            if not os.path.islink(current):
                break
            target = os.readlink(current)
            if os.path.isabs(target):
                current = self.path(target)
            else:
                current = os.path.normpath(os.path.join(os.path.dirname(current), target))
        return self.logical(os.path.realpath(current))

    def is_readable(self, path: str) -> bool:
        full = self.path(path)
        return os.path.isfile(full) and os.access(full, os.R_OK)

    def read(self, path: str, default: str | None = None) -> str | None:
        """
        Read a pseudo-file and return its stripped contents.

        Args:
            path: Logical path of the file.
            default: Value returned if the file cannot be read.

        Returns:
            File contents, or ``default``. With no default, ``None`` tells
            a missing file apart from an empty one.
        """
        full = self.path(path)
        if not self.is_readable(path):
            logger.debug(f"Could not read {full}: missing or not readable")
            return default
        try:
            with open(full, encoding="utf-8", errors="replace") as f:
                return self._read_bounded(f, full).strip()
        except OSError as e:
            logger.debug(f"Could not read {full}: {e}")
            return default

    def _read_bounded(self, f: IO[str], full: str) -> str:
        chunks: list[str] = []
        size = 0
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
            size += len(chunk)
            if size >= self.max_bytes:
                logger.warning(f"Truncated {full} at {self.max_bytes} bytes")
                break
        return "".join(chunks)[: self.max_bytes]

    def read_int(self, path: str, default: int = 0) -> int:
        """Read a file holding a single integer."""
        content = self.read(path)
        if content is None:
            return default
        try:
            return int(content)
        except ValueError:
            return default

    def lines(self, path: str) -> Iterator[str]:
        """
        Stream a file line by line.

        The file is opened immediately, so a missing file raises
        SourceUnavailable here rather than on first iteration. Closing
        the returned generator closes the file.
        """
        full = self.path(path)
        try:
            f = open(full, encoding="utf-8", errors="replace")
        except OSError as e:
            raise SourceUnavailable(path, e.strerror or str(e)) from e
        return _iter_lines(f)

    def glob(self, pattern: str) -> list[str]:
        """Sorted logical paths matching a glob pattern."""
        return sorted(self.logical(p) for p in globmod.glob(self.path(pattern)))


def _iter_lines(f: IO[str]) -> Iterator[str]:
    with f:
        yield from f
