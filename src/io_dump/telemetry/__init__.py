"""Operational logging for io-dump (not the event log)."""

from io_dump.telemetry.system_logger import (
    configure_system_logger_file,
    configure_system_logger_level,
    get_system_logger,
)

__all__ = [
    "configure_system_logger_file",
    "configure_system_logger_level",
    "get_system_logger",
]
