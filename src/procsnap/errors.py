"""
Exception types raised by procsnap.

Only SourceUnavailable for the /proc or /sys root ever reaches the caller;
everything else is recovered inside the collectors and recorded as a
diagnostic.
"""

from __future__ import annotations


class ProcSnapError(Exception):
    """Base class for procsnap errors."""


class SourceUnavailable(ProcSnapError):
    """A file or directory is missing or unreadable."""

    def __init__(self, path: str, reason: str = "not readable"):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SourceUnparsable(ProcSnapError):
    """Content is present but does not have the expected shape."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error parsing {path}: {reason}")


class CollaboratorFailure(ProcSnapError):
    """An external sensor daemon was unreachable or returned malformed data."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")
