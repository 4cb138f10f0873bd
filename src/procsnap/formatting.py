"""
Human-readable rendering helpers.
"""

from __future__ import annotations

_DURATION_UNITS = (
    ("year", 31536000),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def seconds_convert(seconds: int | float) -> str:
    """
    Render a duration as text, e.g. ``"2 days, 3 hours, 1 minute"``.

    Zero-valued units are left out; seconds are dropped once the duration
    reaches a full day.
    """
    remaining = int(seconds)
    if remaining <= 0:
        return "0 seconds"

    parts = []
    for unit, size in _DURATION_UNITS:
        if unit == "second" and int(seconds) >= 86400:
            break
        value, remaining = divmod(remaining, size)
        if value:
            parts.append(f"{value} {unit}{'' if value == 1 else 's'}")
    return ", ".join(parts)


def bytes_to_human(size: int | None) -> str:
    """Convert bytes to human readable string."""
    if size is None:
        return "unknown"
    size_float = float(size)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(size_float) < 1024.0:
            return f"{size_float:.1f} {unit}"
        size_float /= 1024.0
    return f"{size_float:.1f} PB"
