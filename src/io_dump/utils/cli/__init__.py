"""CLI helper utilities."""

from io_dump.utils.cli.helpers import (
    describe_decode_error,
    format_duration_ns,
    format_size,
    load_config_or_exit,
    open_log_or_exit,
)

__all__ = [
    "describe_decode_error",
    "format_duration_ns",
    "format_size",
    "load_config_or_exit",
    "open_log_or_exit",
]
