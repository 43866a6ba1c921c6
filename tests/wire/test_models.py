"""Unit tests for the Event model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from io_dump.constants import MAX_TIMESTAMP_NS
from io_dump.wire import Direction, Event


class TestDirection:
    def test_tags(self) -> None:
        """READ is tag 0 and WRITE is tag 1."""
        assert Direction(0) is Direction.READ
        assert Direction(1) is Direction.WRITE

    def test_arrows(self) -> None:
        assert Direction.READ.arrow == "->"
        assert Direction.WRITE.arrow == "<-"


class TestEvent:
    """Tests for Event validation and views."""

    def test_length_follows_payload(self) -> None:
        event = Event(direction=Direction.READ, timestamp_ns=1, payload=b"abc")

        assert event.length == 3

    def test_default_payload_is_empty(self) -> None:
        event = Event(direction=Direction.WRITE, timestamp_ns=0)

        assert event.payload == b""
        assert event.length == 0

    def test_frozen(self) -> None:
        """Events cannot be modified after creation."""
        event = Event(direction=Direction.READ, timestamp_ns=1)

        with pytest.raises(ValidationError):
            event.timestamp_ns = 2

    @pytest.mark.parametrize("timestamp_ns", [-1, MAX_TIMESTAMP_NS + 1])
    def test_timestamp_range(self, timestamp_ns: int) -> None:
        """Timestamps must fit an unsigned 64-bit field."""
        with pytest.raises(ValidationError):
            Event(direction=Direction.READ, timestamp_ns=timestamp_ns)

    def test_direction_from_tag(self) -> None:
        """Integer tags validate into Direction members."""
        event = Event(direction=1, timestamp_ns=0)

        assert event.direction is Direction.WRITE

    def test_unknown_direction_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Event(direction=2, timestamp_ns=0)

    def test_to_log_record(self) -> None:
        """The JSON view spells out direction and hex-encodes the payload."""
        event = Event(direction=Direction.WRITE, timestamp_ns=42, payload=b"\x00\xffZ")

        assert event.to_log_record() == {
            "direction": "write",
            "timestamp_ns": 42,
            "length": 3,
            "payload_hex": "00ff5a",
        }
