"""CLI output styling for io-dump.

Reads and writes get their own colors so per-direction summaries stay easy
to scan. Labels, outcomes and empty states share one look across commands.
"""

from __future__ import annotations

__all__ = [
    "DIRECTION_COLORS",
    "style_direction",
    "style_dim",
    "style_error",
    "style_label",
    "style_success",
]

import click

from io_dump.wire.models import Direction

# Read traffic in blue, write traffic in magenta
DIRECTION_COLORS: dict[Direction, str] = {
    Direction.READ: "blue",
    Direction.WRITE: "magenta",
}


def style_direction(direction: Direction, width: int = 0) -> str:
    """Lowercase direction name, left-aligned to `width`, in its color.

    Example:
        >>> click.echo(style_direction(Direction.READ, 6) + "3 events")
        read  3 events
    """
    return click.style(f"{direction.name.lower():<{width}}", fg=DIRECTION_COLORS[direction])


def style_label(label: str) -> str:
    """Summary label with a colon suffix, e.g. "Events:"."""
    return click.style(label + ":", fg="cyan", bold=True)


def style_success(message: str) -> str:
    """Outcome line for a passed check or a written file."""
    return click.style("✓ " + message, fg="green")


def style_error(message: str) -> str:
    """Outcome line for a failed check or a refused action."""
    return click.style("✗ " + message, fg="red")


def style_dim(message: str) -> str:
    return click.style(message, dim=True)
