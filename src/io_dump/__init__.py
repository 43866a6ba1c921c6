"""io-dump: record every read and write flowing through an I/O handle.

Wrap a handle with Dump and use it exactly as before. Each completed transfer
is appended to a log sink as a framed binary event that io_dump.wire can
decode later.

    >>> import io
    >>> from io_dump import Dump, decode_events
    >>> log = io.BytesIO()
    >>> stream = Dump(io.BytesIO(b"hello"), log, close_sink=False)
    >>> stream.read(5)
    b'hello'
    >>> [e.payload for e in decode_events(log.getvalue())]
    [b'hello']
"""

__version__ = "0.3.0"

from io_dump.clock import Clock, ElapsedClock, MonotonicClock, SystemClock
from io_dump.dump import Dump, HandleCapabilities, open_dump
from io_dump.exceptions import (
    ConfigurationError,
    HandleClosed,
    InvalidEventError,
    IoDumpError,
    SinkWriteError,
    TruncatedEvent,
)
from io_dump.wire import (
    Direction,
    Event,
    EventReader,
    decode_event,
    decode_events,
    encode_event,
    iter_events,
    read_event,
)

__all__ = [
    "__version__",
    # Wrapper
    "Dump",
    "HandleCapabilities",
    "open_dump",
    # Clocks
    "Clock",
    "ElapsedClock",
    "MonotonicClock",
    "SystemClock",
    # Events
    "Direction",
    "Event",
    "EventReader",
    "decode_event",
    "decode_events",
    "encode_event",
    "iter_events",
    "read_event",
    # Errors
    "ConfigurationError",
    "HandleClosed",
    "InvalidEventError",
    "IoDumpError",
    "SinkWriteError",
    "TruncatedEvent",
]
