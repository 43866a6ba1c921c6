"""Custom exceptions for io-dump.

This module contains all custom exceptions used throughout the package.
All of them derive from IoDumpError:

Wrapper errors:
    - SinkWriteError: The inner transfer succeeded but the event could not
      be appended to the log sink
    - HandleClosed: Operation attempted on a released wrapper

Decoder errors:
    - TruncatedEvent: Log ended mid-header or mid-payload
    - InvalidEventError: Frame carries an unknown direction tag

Configuration errors:
    - ConfigurationError: Config file missing or invalid

Errors raised by the wrapped handle itself are NOT wrapped. Whatever the inner
read/write/flush raises reaches the caller unchanged, and no event is recorded
for the failed attempt.

Usage:
    from io_dump.exceptions import SinkWriteError, TruncatedEvent
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "HandleClosed",
    "InvalidEventError",
    "IoDumpError",
    "SinkWriteError",
    "TruncatedEvent",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from io_dump.wire.models import Direction


class IoDumpError(Exception):
    """Base class for all io-dump errors."""


# =============================================================================
# Wrapper Errors
# =============================================================================


class SinkWriteError(IoDumpError):
    """Appending an event to the log sink failed.

    The data transfer on the inner handle already happened when this is
    raised. The transferred count and bytes are carried on the exception so
    the caller never loses them.

    After the first sink failure the wrapper fails closed: later reads and
    writes raise SinkWriteError (with count 0) without touching the inner
    handle.

    Attributes:
        direction: Direction of the operation whose event was lost.
        count: Bytes transferred by the inner handle for that operation.
        payload: The transferred bytes.
    """

    def __init__(
        self,
        message: str,
        *,
        direction: "Direction | None" = None,
        count: int = 0,
        payload: bytes = b"",
    ) -> None:
        """Initialize SinkWriteError.

        Args:
            message: Human-readable failure description.
            direction: Direction of the affected operation.
            count: Bytes the inner handle transferred.
            payload: Bytes the inner handle transferred.
        """
        super().__init__(message)
        self.message = message
        self.direction = direction
        self.count = count
        self.payload = payload

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        direction = self.direction.name if self.direction is not None else None
        return f"SinkWriteError({self.message!r}, direction={direction!r}, count={self.count})"


class HandleClosed(IoDumpError, ValueError):
    """Operation attempted after the wrapper was released.

    Subclasses ValueError so callers treating it like any closed Python
    file object keep working.
    """


# =============================================================================
# Decoder Errors
# =============================================================================


class TruncatedEvent(IoDumpError):
    """The log ended before a full header or payload was available.

    Signals an incomplete or corrupted log. Never retried.

    Attributes:
        offset: Byte offset of the frame that is incomplete.
        expected: Bytes needed to complete the header or payload.
        received: Bytes actually available.
    """

    def __init__(self, message: str, *, offset: int = 0, expected: int = 0, received: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.expected = expected
        self.received = received


class InvalidEventError(IoDumpError):
    """A frame header carries an unknown direction tag.

    Attributes:
        offset: Byte offset of the offending frame.
        tag: The tag value found.
    """

    def __init__(self, message: str, *, offset: int = 0, tag: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.tag = tag


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(IoDumpError):
    """Configuration file is missing, unreadable or fails validation."""
