"""Transparent I/O wrapper that records every completed transfer.

Dump wraps an inner handle (anything with readinto/read and/or write) and a
log sink (anything with write and flush). Reads and writes are delegated to
the inner handle unchanged; after each completed transfer an Event holding
exactly the transferred bytes is framed and appended to the sink before the
result is returned to the caller.

Recording rules:
- Only completed transfers are recorded. If the inner call raises, the
  exception propagates unchanged and nothing is appended.
- The payload is the transferred prefix of the buffer, never the full
  requested size.
- Zero-byte results (end of stream, empty writes) are recorded.
- The timestamp is taken after the inner call returns.
- A non-blocking inner handle returning None transferred nothing, so None is
  passed through and nothing is recorded.

Sink failures fail closed: the call raises SinkWriteError carrying the
transferred count and bytes, and every later read/write raises
SinkWriteError without touching the inner handle.

Example:
    >>> with Dump.to_file(sock.makefile("rwb", buffering=0), "session.bin") as stream:
    ...     stream.write(b"PING\\r\\n")
    ...     reply = stream.read(64)
"""

from __future__ import annotations

__all__ = [
    "Dump",
    "HandleCapabilities",
    "open_dump",
]

import io
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from io_dump.clock import Clock, SystemClock, create_clock
from io_dump.exceptions import HandleClosed, SinkWriteError
from io_dump.telemetry.system_logger import (
    configure_system_logger_file,
    configure_system_logger_level,
    get_system_logger,
)
from io_dump.wire.codec import encode_event
from io_dump.wire.models import Direction, Event

if TYPE_CHECKING:
    from io_dump.config import DumpConfig


# =============================================================================
# Capability detection
# =============================================================================


def _supports(handle: Any, probe_name: str, *methods: str) -> bool:
    """Check that a handle has one of `methods` and, if it offers one, that its probe agrees."""
    if not any(callable(getattr(handle, name, None)) for name in methods):
        return False
    probe = getattr(handle, probe_name, None)
    if not callable(probe):
        return True
    try:
        return bool(probe())
    except (OSError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class HandleCapabilities:
    """What the wrapped handle can do, detected once at wrap time.

    Attributes:
        readable: Handle offers readinto() or read().
        writable: Handle offers write().
        flushable: Handle offers flush().
        seekable: Handle reports itself seekable. Informational only; the
            wrapper itself never seeks.
    """

    readable: bool
    writable: bool
    flushable: bool
    seekable: bool

    @classmethod
    def detect(cls, handle: Any) -> HandleCapabilities:
        """Probe a handle's capabilities."""
        return cls(
            readable=_supports(handle, "readable", "readinto", "read"),
            writable=_supports(handle, "writable", "write"),
            flushable=callable(getattr(handle, "flush", None)),
            seekable=_supports(handle, "seekable", "seek"),
        )


_NO_CAPABILITIES = HandleCapabilities(readable=False, writable=False, flushable=False, seekable=False)


# =============================================================================
# Sink helpers
# =============================================================================


def _append(sink: Any, frame: bytes) -> None:
    """Append a whole frame to the sink, completing short writes.

    A write() returning None (non-blocking raw sink that would block) wrote
    nothing and counts as no progress.

    Raises:
        OSError: Sink accepted no bytes, or its own write failed.
    """
    while frame:
        written = sink.write(frame)
        if written is None:
            raise OSError(f"log sink would block ({len(frame)} bytes pending)")
        if written <= 0:
            raise OSError(f"log sink accepted no bytes ({len(frame)} pending)")
        frame = frame[written:]


# =============================================================================
# Dump
# =============================================================================


class Dump(io.RawIOBase):
    """Raw I/O wrapper logging every completed read and write to a sink.

    Behaves like the wrapped handle for readinto/read/write/flush and can be
    layered under io.BufferedReader, io.BufferedWriter or io.TextIOWrapper.
    The inner handle and the sink are held privately so reads and writes
    cannot bypass the log; use `capabilities` to inspect the inner handle.

    Not thread-safe. Use one wrapper per handle from one thread at a time.
    """

    # Defaults so close() from IOBase.__del__ is safe on a half-built instance
    _inner: Any = None
    _sink: Any = None
    _capabilities: HandleCapabilities = _NO_CAPABILITIES
    _close_inner: bool = False
    _close_sink: bool = False
    _sink_error: SinkWriteError | None = None

    def __init__(
        self,
        inner: Any,
        sink: Any,
        *,
        clock: Clock | None = None,
        close_inner: bool = True,
        close_sink: bool = True,
        flush_each_event: bool = False,
    ) -> None:
        """Wrap `inner`, recording its traffic to `sink`.

        Args:
            inner: Handle to wrap. Needs readinto()/read() and/or write().
            sink: Log destination with write(bytes) and flush().
            clock: Time source for event timestamps (default: SystemClock).
            close_inner: Close the inner handle on release (else only flush it).
            close_sink: Close the sink on release (else only flush it).
            flush_each_event: Flush the sink after every recorded event.

        Raises:
            TypeError: Inner handle can neither read nor write, or the sink
                lacks write()/flush().
        """
        super().__init__()

        for name in ("write", "flush"):
            if not callable(getattr(sink, name, None)):
                raise TypeError(f"log sink must provide {name}(), got {type(sink).__name__}")

        capabilities = HandleCapabilities.detect(inner)
        if not (capabilities.readable or capabilities.writable):
            raise TypeError(f"{type(inner).__name__} supports neither reading nor writing")

        self._inner = inner
        self._sink = sink
        self._capabilities = capabilities
        self._clock = clock if clock is not None else SystemClock()
        self._close_inner = close_inner
        self._close_sink = close_sink
        self._flush_each_event = flush_each_event
        self._logger = get_system_logger()

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def to_file(cls, inner: Any, path: str | Path, *, append: bool = False, **kwargs: Any) -> Dump:
        """Record `inner`'s traffic to a file at `path`.

        An existing file is overwritten unless `append` is set. The parent
        directory is created if needed.

        If the file cannot be opened, or the wrapper rejects the inner handle,
        the inner handle is closed (it was handed over to the wrapper) unless
        close_inner=False, and the error propagates.
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            sink = open(path, "ab" if append else "wb")
        except OSError:
            _close_handed_over(inner, kwargs)
            raise

        try:
            return cls(inner, sink, **kwargs)
        except BaseException:
            try:
                _close_handed_over(inner, kwargs)
            finally:
                sink.close()
            raise

    @classmethod
    def to_stdout(cls, inner: Any, **kwargs: Any) -> Dump:
        """Record `inner`'s traffic to the process's binary stdout (borrowed, never closed)."""
        kwargs["close_sink"] = False
        return cls(inner, sys.stdout.buffer, **kwargs)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def capabilities(self) -> HandleCapabilities:
        """Capabilities of the wrapped handle."""
        return self._capabilities

    @property
    def sink_failed(self) -> bool:
        """True once appending to the sink has failed; the wrapper no longer transfers."""
        return self._sink_error is not None

    def readable(self) -> bool:
        self._check_open("readable")
        return self._capabilities.readable

    def writable(self) -> bool:
        self._check_open("writable")
        return self._capabilities.writable

    def seekable(self) -> bool:
        self._check_open("seekable")
        return False

    def __repr__(self) -> str:
        state = "closed" if self.closed else "active"
        return (
            f"<Dump inner={type(self._inner).__name__} readable={self._capabilities.readable} "
            f"writable={self._capabilities.writable} {state}>"
        )

    # -------------------------------------------------------------------------
    # I/O
    # -------------------------------------------------------------------------

    def _check_open(self, operation: str) -> None:
        if self.closed:
            raise HandleClosed(f"{operation} on released Dump")

    def _check_sink(self, operation: str) -> None:
        # Fail closed once the log can no longer be a faithful record
        if self._sink_error is not None:
            raise SinkWriteError(
                f"{operation} refused: log sink failed earlier",
                direction=self._sink_error.direction,
            ) from self._sink_error

    def readinto(self, buffer: Any) -> int | None:
        """Read into `buffer` from the inner handle and record the bytes read.

        Returns:
            int | None: Count reported by the inner handle, or None if a
            non-blocking handle had no data.

        Raises:
            HandleClosed: Wrapper was released.
            io.UnsupportedOperation: Inner handle is not readable.
            SinkWriteError: Read succeeded but could not be recorded, or the
                sink failed on an earlier call.
        """
        self._check_open("read")
        if not self._capabilities.readable:
            raise io.UnsupportedOperation("read: wrapped handle is not readable")
        self._check_sink("read")

        with memoryview(buffer) as view, view.cast("B") as target:
            count = self._inner_readinto(target)
            if count is None:
                return None
            _check_count(count, len(target), "read")
            payload = bytes(target[:count])

        self._record(Direction.READ, payload)
        return count

    def _inner_readinto(self, target: memoryview) -> int | None:
        readinto = getattr(self._inner, "readinto", None)
        if callable(readinto):
            return readinto(target)

        data = self._inner.read(len(target))
        if data is None:
            return None
        _check_count(len(data), len(target), "read")
        target[: len(data)] = data
        return len(data)

    def write(self, buffer: Any) -> int | None:
        """Write `buffer` to the inner handle and record the accepted prefix.

        Returns:
            int | None: Count the inner handle accepted, or None if a
            non-blocking handle would block.

        Raises:
            HandleClosed: Wrapper was released.
            io.UnsupportedOperation: Inner handle is not writable.
            OSError: Inner handle reported a count outside 0..len(buffer).
                The inner write already happened, its bytes are not
                recorded, and the wrapper stays usable (sink_failed is
                unchanged).
            SinkWriteError: Write succeeded but could not be recorded, or the
                sink failed on an earlier call.
        """
        self._check_open("write")
        if not self._capabilities.writable:
            raise io.UnsupportedOperation("write: wrapped handle is not writable")
        self._check_sink("write")

        count = self._inner.write(buffer)
        if count is None:
            return None

        with memoryview(buffer) as view, view.cast("B") as source:
            _check_count(count, len(source), "write")
            payload = bytes(source[:count])

        self._record(Direction.WRITE, payload)
        return count

    def flush(self) -> None:
        """Flush the inner handle, if it supports flushing. The sink is not flushed."""
        self._check_open("flush")
        if self._capabilities.flushable:
            self._inner.flush()

    def flush_log(self) -> None:
        """Flush the log sink only.

        Raises:
            HandleClosed: Wrapper was released.
            SinkWriteError: Sink flush failed. The wrapper fails closed.
        """
        self._check_open("flush_log")
        try:
            self._sink.flush()
        except (OSError, ValueError) as e:
            raise self._fail_sink("Flushing the log sink failed", e) from e

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    def _record(self, direction: Direction, payload: bytes) -> None:
        event = Event(direction=direction, timestamp_ns=self._clock.now_ns(), payload=payload)
        frame = encode_event(event)

        try:
            _append(self._sink, frame)
            if self._flush_each_event:
                self._sink.flush()
        except (OSError, ValueError) as e:
            raise self._fail_sink(
                f"Recording {direction.name.lower()} of {event.length} bytes failed",
                e,
                direction=direction,
                payload=payload,
            ) from e

        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                {
                    "event": "io_recorded",
                    "message": f"{direction.name.lower()} {event.length} bytes",
                    "direction": direction.name.lower(),
                    "length": event.length,
                    "timestamp_ns": event.timestamp_ns,
                }
            )

    def _fail_sink(
        self,
        message: str,
        cause: BaseException,
        *,
        direction: Direction | None = None,
        payload: bytes = b"",
    ) -> SinkWriteError:
        error = SinkWriteError(
            f"{message}: {cause}",
            direction=direction,
            count=len(payload),
            payload=payload,
        )
        self._sink_error = error
        self._logger.error(
            {
                "event": "sink_write_failed",
                "message": error.message,
                "direction": direction.name.lower() if direction is not None else None,
                "count": error.count,
                "error_type": type(cause).__name__,
            }
        )
        return error

    # -------------------------------------------------------------------------
    # Release
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the wrapper: flush and close the inner handle, then the sink.

        Both are released even if releasing the other fails. Calling close()
        more than once is a no-op.
        """
        if self.closed:
            return
        try:
            super().close()
        finally:
            self._release()

    def _release(self) -> None:
        inner, sink = self._inner, self._sink
        try:
            if inner is not None and self._close_inner and callable(getattr(inner, "close", None)):
                inner.close()
        finally:
            if sink is not None:
                try:
                    sink.flush()
                finally:
                    if self._close_sink and callable(getattr(sink, "close", None)):
                        sink.close()
                    self._logger.debug({"event": "dump_released", "message": "Dump released"})


def _close_handed_over(inner: Any, kwargs: dict[str, Any]) -> None:
    """Close an inner handle whose ownership passed to a wrapper that was never built."""
    if kwargs.get("close_inner", True) and callable(getattr(inner, "close", None)):
        inner.close()


def _check_count(count: int, size: int, operation: str) -> None:
    """Reject transfer counts outside 0..size."""
    if not 0 <= count <= size:
        raise OSError(f"wrapped handle reported {count} bytes for a {size} byte {operation}")


def open_dump(inner: Any, config: DumpConfig) -> Dump:
    """Create a file-backed Dump as described by `config`.

    Also applies the config's system logging settings.

    Args:
        inner: Handle to wrap.
        config: Validated configuration.

    Returns:
        Dump: Active wrapper recording to config.log_path.
    """
    configure_system_logger_level(config.logging.log_level)
    if config.logging.system_log_path is not None:
        configure_system_logger_file(Path(config.logging.system_log_path).expanduser())

    return Dump.to_file(
        inner,
        config.resolved_log_path(),
        append=config.mode == "append",
        clock=create_clock(config.clock),
        flush_each_event=config.flush_each_event,
    )
