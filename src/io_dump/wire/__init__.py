"""Event model and binary framing.

Provides the Direction/Event types and the encoder/decoder for the
on-disk log format written by io_dump.dump.Dump.
"""

from io_dump.wire.codec import (
    EventReader,
    decode_event,
    decode_events,
    encode_event,
    iter_events,
    read_event,
)
from io_dump.wire.models import Direction, Event

__all__ = [
    # Models
    "Direction",
    "Event",
    # Codec
    "EventReader",
    "decode_event",
    "decode_events",
    "encode_event",
    "iter_events",
    "read_event",
]
