"""Pydantic models for observed I/O events.

An Event is one completed read or write on a wrapped handle:
- direction: READ or WRITE (the numeric value is the on-wire tag)
- timestamp_ns: completion time from the wrapper's clock, in nanoseconds
- payload: exactly the bytes transferred, never the full requested buffer

Events are immutable once created.
"""

from __future__ import annotations

__all__ = [
    "Direction",
    "Event",
]

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from io_dump.constants import MAX_TIMESTAMP_NS, READ_ARROW, WRITE_ARROW


class Direction(IntEnum):
    """Direction in which a payload was transferred.

    Values are the direction tags used in the binary frame header.
    """

    READ = 0
    WRITE = 1

    @property
    def arrow(self) -> str:
        """Arrow used by the text rendering ("->" read, "<-" write)."""
        return READ_ARROW if self is Direction.READ else WRITE_ARROW


class Event(BaseModel):
    """One recorded, completed read or write operation."""

    direction: Direction
    timestamp_ns: int = Field(ge=0, le=MAX_TIMESTAMP_NS)
    payload: bytes = b""

    model_config = ConfigDict(frozen=True)

    @property
    def length(self) -> int:
        """Number of payload bytes."""
        return len(self.payload)

    def to_log_record(self) -> dict[str, Any]:
        """Return a JSON-serializable view with the payload as hex."""
        return {
            "direction": self.direction.name.lower(),
            "timestamp_ns": self.timestamp_ns,
            "length": self.length,
            "payload_hex": self.payload.hex(),
        }
