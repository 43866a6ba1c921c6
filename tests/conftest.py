"""Shared fixtures: deterministic clocks, scripted handles and sinks."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from typing import Any

import pytest

from io_dump.telemetry.system_logger import get_system_logger, reset_system_logger


class FakeClock:
    """Clock returning start, start + step, start + 2*step, ..."""

    def __init__(self, start: int = 1_000_000_000, step: int = 1_000) -> None:
        self.now = start
        self.step = step
        self.calls = 0

    def now_ns(self) -> int:
        value = self.now
        self.now += self.step
        self.calls += 1
        return value


class ScriptedHandle:
    """Read/write handle driven by a script of results.

    Each entry in `reads` is either bytes (copied into the caller's buffer,
    truncated to its size) or an exception instance to raise. `write_limits`
    caps how many bytes each write accepts; an exception instance raises.
    """

    def __init__(self, reads: list[Any] | None = None, write_limits: list[Any] | None = None) -> None:
        self.reads = list(reads or [])
        self.write_limits = list(write_limits or [])
        self.written = bytearray()
        self.read_calls = 0
        self.write_calls = 0
        self.flushes = 0
        self.closed = False

    def readinto(self, buffer: Any) -> int | None:
        self.read_calls += 1
        result = self.reads.pop(0) if self.reads else b""
        if isinstance(result, BaseException):
            raise result
        if result is None:
            return None
        count = min(len(result), len(buffer))
        buffer[:count] = result[:count]
        return count

    def write(self, buffer: Any) -> int | None:
        self.write_calls += 1
        limit = self.write_limits.pop(0) if self.write_limits else None
        if isinstance(limit, BaseException):
            raise limit
        data = bytes(buffer)
        accepted = data if limit is None else data[:limit]
        self.written += accepted
        return len(accepted)

    def flush(self) -> None:
        self.flushes += 1

    def close(self) -> None:
        self.closed = True


class RecordingSink:
    """Sink collecting appended bytes, optionally failing or accepting short writes."""

    def __init__(self, fail_on_write: int | None = None, chunk: int | None = None) -> None:
        self.data = bytearray()
        self.fail_on_write = fail_on_write
        self.chunk = chunk
        self.writes = 0
        self.flushes = 0
        self.closed = False

    def write(self, data: bytes) -> int:
        self.writes += 1
        if self.fail_on_write is not None and self.writes >= self.fail_on_write:
            raise OSError(28, "No space left on device")
        accepted = data if self.chunk is None else data[: self.chunk]
        self.data += accepted
        return len(accepted)

    def flush(self) -> None:
        self.flushes += 1

    def close(self) -> None:
        self.closed = True


class ListHandler(logging.Handler):
    """Logging handler keeping records in memory."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture(autouse=True)
def _fresh_system_logger() -> Iterator[None]:
    """Give every test its own system logger."""
    reset_system_logger()
    yield
    reset_system_logger()


@pytest.fixture
def system_log_records() -> list[logging.LogRecord]:
    """Capture records sent to the system logger."""
    handler = ListHandler()
    get_system_logger().addHandler(handler)
    return handler.records


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def log_buffer() -> io.BytesIO:
    """In-memory sink that stays readable after the wrapper is released."""
    return io.BytesIO()
