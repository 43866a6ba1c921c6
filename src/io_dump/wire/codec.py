"""Binary framing for observed I/O events.

Each event is encoded as a fixed 17-byte header followed by the raw payload:

    offset  size  field
    0       1     direction tag (0 = read, 1 = write)
    1       8     timestamp, nanoseconds, unsigned big-endian
    9       8     payload length, unsigned big-endian
    17      N     payload bytes, verbatim

A log is the plain concatenation of frames. There are no separators and no
trailer; end of log is end of the underlying stream. The payload is never
compressed or checksummed.
"""

from __future__ import annotations

__all__ = [
    "EventReader",
    "decode_event",
    "decode_events",
    "encode_event",
    "iter_events",
    "read_event",
]

import struct
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

from io_dump.constants import HEADER_FORMAT, HEADER_SIZE, READ_CHUNK_SIZE
from io_dump.exceptions import InvalidEventError, TruncatedEvent
from io_dump.wire.models import Direction, Event

_HEADER = struct.Struct(HEADER_FORMAT)


def encode_event(event: Event) -> bytes:
    """Encode an event as one self-delimiting frame.

    Performs no I/O. The caller appends the result to its sink.

    Args:
        event: Event to encode.

    Returns:
        bytes: Header followed by the payload.
    """
    return _HEADER.pack(event.direction, event.timestamp_ns, event.length) + event.payload


def _parse_header(header: bytes | memoryview, offset: int) -> tuple[Direction, int, int]:
    """Unpack a frame header into (direction, timestamp_ns, length)."""
    tag, timestamp_ns, length = _HEADER.unpack(header)
    try:
        direction = Direction(tag)
    except ValueError:
        raise InvalidEventError(
            f"Unknown direction tag {tag} in frame at offset {offset}",
            offset=offset,
            tag=tag,
        ) from None
    return direction, timestamp_ns, length


def decode_event(data: bytes | bytearray | memoryview, offset: int = 0) -> tuple[Event, int]:
    """Decode the frame starting at `offset` in a byte buffer.

    Args:
        data: Buffer holding one or more frames.
        offset: Position of the frame header.

    Returns:
        tuple[Event, int]: The decoded event and the offset just past it.

    Raises:
        TruncatedEvent: Buffer ends mid-header or mid-payload.
        InvalidEventError: Unknown direction tag.
    """
    with memoryview(data) as view:
        available = len(view) - offset
        if available < HEADER_SIZE:
            raise TruncatedEvent(
                f"Log ended mid-header at offset {offset}",
                offset=offset,
                expected=HEADER_SIZE,
                received=max(available, 0),
            )

        direction, timestamp_ns, length = _parse_header(view[offset : offset + HEADER_SIZE], offset)

        start = offset + HEADER_SIZE
        end = start + length
        if end > len(view):
            raise TruncatedEvent(
                f"Log ended mid-payload at offset {offset}",
                offset=offset,
                expected=length,
                received=len(view) - start,
            )

        event = Event(direction=direction, timestamp_ns=timestamp_ns, payload=bytes(view[start:end]))
    return event, end


def decode_events(data: bytes | bytearray | memoryview) -> list[Event]:
    """Decode every frame in a byte buffer, in order."""
    events: list[Event] = []
    offset = 0
    total = len(data)
    while offset < total:
        event, offset = decode_event(data, offset)
        events.append(event)
    return events


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read up to `size` bytes, stopping early only at end of stream.

    Reads in bounded chunks so a corrupted length field cannot force one
    huge allocation before the stream runs out.
    """
    buf = bytearray()
    while len(buf) < size:
        chunk = stream.read(min(size - len(buf), READ_CHUNK_SIZE))
        if not chunk:
            break
        buf += chunk
    return bytes(buf)


def read_event(stream: BinaryIO, *, offset: int = 0) -> Event | None:
    """Read the next event from a binary stream.

    Args:
        stream: Readable binary stream positioned at a frame boundary.
        offset: Stream position of the frame, used in error reports only.

    Returns:
        Event | None: The event, or None if the stream is at a clean end.

    Raises:
        TruncatedEvent: Stream ends mid-header or mid-payload.
        InvalidEventError: Unknown direction tag.
    """
    header = _read_exact(stream, HEADER_SIZE)
    if not header:
        return None
    if len(header) < HEADER_SIZE:
        raise TruncatedEvent(
            f"Log ended mid-header at offset {offset}",
            offset=offset,
            expected=HEADER_SIZE,
            received=len(header),
        )

    direction, timestamp_ns, length = _parse_header(header, offset)

    payload = _read_exact(stream, length)
    if len(payload) < length:
        raise TruncatedEvent(
            f"Log ended mid-payload at offset {offset}",
            offset=offset,
            expected=length,
            received=len(payload),
        )

    return Event(direction=direction, timestamp_ns=timestamp_ns, payload=payload)


class EventReader:
    """Iterate over the events stored in a binary stream.

    Example:
        >>> with EventReader.open("session.bin") as reader:
        ...     for event in reader:
        ...         print(event.direction.name, event.length)
    """

    def __init__(self, stream: BinaryIO, *, close_stream: bool = False) -> None:
        """Initialize the reader.

        Args:
            stream: Readable binary stream positioned at the start of a log.
            close_stream: Whether close() also closes the stream.
        """
        self._stream = stream
        self._close_stream = close_stream
        self._offset = 0

    @classmethod
    def open(cls, path: str | Path) -> EventReader:
        """Open a log file for reading. The reader owns the file."""
        return cls(open(path, "rb"), close_stream=True)

    @property
    def offset(self) -> int:
        """Byte offset of the next frame."""
        return self._offset

    def __iter__(self) -> Iterator[Event]:
        return self

    def __next__(self) -> Event:
        event = read_event(self._stream, offset=self._offset)
        if event is None:
            raise StopIteration
        self._offset += HEADER_SIZE + event.length
        return event

    def close(self) -> None:
        if self._close_stream:
            self._stream.close()

    def __enter__(self) -> EventReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def iter_events(stream: BinaryIO) -> Iterator[Event]:
    """Yield every event of a binary stream, in order."""
    return iter(EventReader(stream))
