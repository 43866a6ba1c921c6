"""Shared CLI utility functions.

Provides common helpers for CLI commands to avoid duplication.
"""

from __future__ import annotations

__all__ = [
    "describe_decode_error",
    "format_duration_ns",
    "format_size",
    "load_config_or_exit",
    "open_log_or_exit",
]

from pathlib import Path

import click

from io_dump.config import DumpConfig
from io_dump.exceptions import ConfigurationError, InvalidEventError, IoDumpError, TruncatedEvent
from io_dump.wire.codec import EventReader


def open_log_or_exit(path: Path) -> EventReader:
    """Open an event log for reading, or exit with a CLI error.

    Raises:
        click.ClickException: If the file cannot be opened.
    """
    try:
        return EventReader.open(path)
    except OSError as e:
        raise click.ClickException(f"Cannot open log {path}: {e.strerror or e}") from e


def load_config_or_exit(path: Path) -> DumpConfig:
    """Load a config file, or exit with a CLI error.

    Raises:
        click.ClickException: If the config is missing or invalid.
    """
    try:
        return DumpConfig.load_from_file(path)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def describe_decode_error(error: IoDumpError) -> str:
    """One-line description of a decoding failure for CLI output."""
    if isinstance(error, TruncatedEvent):
        return (
            f"truncated frame at offset {error.offset} "
            f"(needed {error.expected} bytes, found {error.received})"
        )
    if isinstance(error, InvalidEventError):
        return f"invalid frame at offset {error.offset} (direction tag {error.tag})"
    return str(error)


def format_size(size_bytes: int) -> str:
    """Format a byte count as a human-readable string (e.g., "1.5 KB")."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in ("KB", "MB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def format_duration_ns(duration_ns: int) -> str:
    """Format a nanosecond duration as seconds with millisecond precision."""
    return f"{duration_ns / 1_000_000_000:.3f}s"
