"""Human-readable hex dump rendering of recorded events.

Layout of one event:

    ->  0.012s  3 bytes
    41 42 43 ...(hex, 25 bytes per line, padded)       A B C
    <blank line>

"->" marks data read from the handle, "<-" data written to it. Elapsed time
is measured from an origin timestamp (the first event by default) and rounded
up to whole milliseconds. Logs written with the "elapsed" clock already hold
time since the wrapper was created; render them with origin_ns=0 to show
that instead of time since the first event. Printable ASCII is shown as-is; NUL, tab, LF and CR
as escapes; anything else as "\\?".
"""

from __future__ import annotations

__all__ = [
    "escape_byte",
    "render_data_line",
    "render_event",
    "render_events",
]

from collections.abc import Iterable, Iterator

from io_dump.constants import RENDER_BYTES_PER_LINE
from io_dump.wire.models import Event

_NS_PER_MS = 1_000_000

_ESCAPES: dict[int, str] = {
    0: "\\0",
    9: "\\t",
    10: "\\n",
    13: "\\r",
}


def escape_byte(byte: int) -> str:
    """Two-character ASCII column entry for a byte."""
    if byte in _ESCAPES:
        return _ESCAPES[byte]
    if 32 <= byte <= 126:
        return " " + chr(byte)
    return "\\?"


def render_data_line(chunk: bytes) -> str:
    """Render up to RENDER_BYTES_PER_LINE bytes as padded hex plus ASCII."""
    hex_part = "".join(f"{byte:02X} " for byte in chunk)
    hex_part += "   " * (RENDER_BYTES_PER_LINE - len(chunk))
    return hex_part + "    " + "".join(escape_byte(byte) for byte in chunk)


def _elapsed_ms(timestamp_ns: int, origin_ns: int) -> int:
    delta = max(timestamp_ns - origin_ns, 0)
    return -(-delta // _NS_PER_MS)  # ceil


def render_event(event: Event, origin_ns: int = 0) -> str:
    """Render one event, including its trailing blank line."""
    elapsed = _elapsed_ms(event.timestamp_ns, origin_ns) / 1000
    lines = [f"{event.direction.arrow}  {elapsed:.3f}s  {event.length} bytes"]

    payload = event.payload
    for pos in range(0, len(payload), RENDER_BYTES_PER_LINE):
        lines.append(render_data_line(payload[pos : pos + RENDER_BYTES_PER_LINE]))

    return "\n".join(lines) + "\n\n"


def render_events(events: Iterable[Event], origin_ns: int | None = None) -> Iterator[str]:
    """Render events lazily, timing them from `origin_ns` or the first event."""
    for event in events:
        if origin_ns is None:
            origin_ns = event.timestamp_ns
        yield render_event(event, origin_ns)
