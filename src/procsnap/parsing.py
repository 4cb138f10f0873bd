"""
Tagged parse results.

Each line-level parser returns either ``Parsed(value)`` or
``Unparsable(reason)`` so callers can decide whether a bad line is worth a
diagnostic or should simply be skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    """A successfully parsed value."""

    value: T

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Unparsable:
    """Input that did not match the expected shape."""

    reason: str
    text: str = ""

    def __bool__(self) -> bool:
        return False


ParseResult = Union[Parsed[T], Unparsable]
