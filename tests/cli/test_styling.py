"""Unit tests for CLI styling helpers."""

from __future__ import annotations

import click

from io_dump.cli.styling import DIRECTION_COLORS, style_direction, style_error, style_label, style_success
from io_dump.wire import Direction


class TestStyleDirection:
    def test_padded_name(self) -> None:
        """The name is lowercased and padded before coloring."""
        assert click.unstyle(style_direction(Direction.WRITE, 6)) == "write "

    def test_no_padding_by_default(self) -> None:
        assert click.unstyle(style_direction(Direction.READ)) == "read"

    def test_directions_have_distinct_colors(self) -> None:
        assert set(DIRECTION_COLORS) == set(Direction)
        assert style_direction(Direction.READ) != click.unstyle(style_direction(Direction.READ))
        assert DIRECTION_COLORS[Direction.READ] != DIRECTION_COLORS[Direction.WRITE]


def test_outcome_prefixes() -> None:
    assert click.unstyle(style_success("ok")) == "✓ ok"
    assert click.unstyle(style_error("bad")) == "✗ bad"
    assert click.unstyle(style_label("Events")) == "Events:"
