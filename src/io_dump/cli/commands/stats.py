"""Stats command for io-dump CLI.

Summarizes a log file: event and byte counts per direction, time span.
"""

from __future__ import annotations

__all__ = ["LogStats", "show_stats", "stats"]

import sys
from dataclasses import dataclass, field
from pathlib import Path

import click

from io_dump.exceptions import IoDumpError
from io_dump.utils.cli import describe_decode_error, format_duration_ns, format_size, open_log_or_exit
from io_dump.wire.models import Direction, Event

from ..styling import style_dim, style_direction, style_error, style_label


@dataclass
class LogStats:
    """Running totals over a sequence of events."""

    events: dict[Direction, int] = field(default_factory=lambda: dict.fromkeys(Direction, 0))
    byte_counts: dict[Direction, int] = field(default_factory=lambda: dict.fromkeys(Direction, 0))
    first_ns: int | None = None
    last_ns: int | None = None

    def add(self, event: Event) -> None:
        self.events[event.direction] += 1
        self.byte_counts[event.direction] += event.length
        if self.first_ns is None:
            self.first_ns = event.timestamp_ns
        self.last_ns = event.timestamp_ns

    @property
    def total_events(self) -> int:
        return sum(self.events.values())


def show_stats(summary: LogStats) -> None:
    """Print a LogStats summary."""
    click.echo(style_label("Events") + f" {summary.total_events}")
    for direction in Direction:
        click.echo(
            f"  {style_direction(direction, 6)} {summary.events[direction]} events, "
            f"{format_size(summary.byte_counts[direction])}"
        )
    if summary.first_ns is None or summary.last_ns is None:
        click.echo(style_dim("No events recorded."))
        return
    click.echo(style_label("First") + f" {summary.first_ns} ns")
    click.echo(style_label("Last") + f" {summary.last_ns} ns")
    click.echo(style_label("Span") + f" {format_duration_ns(summary.last_ns - summary.first_ns)}")


@click.command()
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def stats(log_file: Path) -> None:
    """Summarize the events recorded in LOG_FILE."""
    summary = LogStats()
    with open_log_or_exit(log_file) as reader:
        try:
            for event in reader:
                summary.add(event)
        except IoDumpError as e:
            show_stats(summary)
            click.echo(style_error(describe_decode_error(e)), err=True)
            sys.exit(1)
    show_stats(summary)
