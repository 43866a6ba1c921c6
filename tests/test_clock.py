"""Unit tests for time sources."""

from __future__ import annotations

import time

import pytest

from io_dump.clock import Clock, ElapsedClock, MonotonicClock, SystemClock, create_clock


class TestClocks:
    def test_system_clock_is_wall_time(self) -> None:
        before = time.time_ns()
        value = SystemClock().now_ns()
        after = time.time_ns()

        assert before <= value <= after

    def test_monotonic_clock_never_goes_back(self) -> None:
        clock = MonotonicClock()

        readings = [clock.now_ns() for _ in range(100)]

        assert readings == sorted(readings)

    def test_elapsed_clock_starts_near_zero(self) -> None:
        clock = ElapsedClock()

        first = clock.now_ns()

        assert 0 <= first < 1_000_000_000
        assert clock.now_ns() >= first

    def test_clocks_satisfy_protocol(self) -> None:
        for clock in (SystemClock(), MonotonicClock(), ElapsedClock()):
            assert isinstance(clock, Clock)


class TestCreateClock:
    @pytest.mark.parametrize(
        ("name", "cls"),
        [("wall", SystemClock), ("monotonic", MonotonicClock), ("elapsed", ElapsedClock)],
    )
    def test_known_names(self, name: str, cls: type) -> None:
        assert isinstance(create_clock(name), cls)

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown clock"):
            create_clock("sundial")
