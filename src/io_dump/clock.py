"""Time sources for event timestamps.

The wrapper never reads a global clock directly. It calls `now_ns()` on an
injected clock so tests can supply a deterministic one.

Available clocks:
- SystemClock: wall-clock nanoseconds since the Unix epoch (default)
- MonotonicClock: monotonic nanoseconds, immune to wall-clock adjustments
- ElapsedClock: nanoseconds since the clock was created
"""

from __future__ import annotations

__all__ = [
    "CLOCKS",
    "Clock",
    "ElapsedClock",
    "MonotonicClock",
    "SystemClock",
    "create_clock",
]

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current time in integer nanoseconds."""

    def now_ns(self) -> int: ...


class SystemClock:
    """Wall-clock time (nanoseconds since the Unix epoch)."""

    def now_ns(self) -> int:
        return time.time_ns()


class MonotonicClock:
    """Monotonic time. Only differences between readings are meaningful."""

    def now_ns(self) -> int:
        return time.monotonic_ns()


class ElapsedClock:
    """Nanoseconds elapsed since the clock was created.

    Gives logs that start near zero, like a session recording where only
    relative timing matters.
    """

    def __init__(self) -> None:
        self._origin = time.monotonic_ns()

    def now_ns(self) -> int:
        return time.monotonic_ns() - self._origin


# Config name -> clock class
CLOCKS: dict[str, type[Clock]] = {
    "wall": SystemClock,
    "monotonic": MonotonicClock,
    "elapsed": ElapsedClock,
}


def create_clock(name: str) -> Clock:
    """Create a clock by its config name ("wall", "monotonic" or "elapsed").

    Raises:
        ValueError: If the name is unknown.
    """
    try:
        return CLOCKS[name]()
    except KeyError:
        raise ValueError(f"Unknown clock: {name!r} (expected one of {sorted(CLOCKS)})") from None
