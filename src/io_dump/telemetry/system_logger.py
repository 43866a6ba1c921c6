"""System logger for operational events.

This module provides a singleton system logger for everything that is not part
of the event log itself (sink failures, wrapper release, recorded-event traces
at DEBUG).

Logging strategy:
- Console (stderr): INFO and above by default, adjustable with
  configure_system_logger_level()
- File (JSONL): Only issues (WARNING, ERROR, CRITICAL), attached with
  configure_system_logger_file() once a path is known

The event log written by Dump is a separate binary stream and never goes
through this logger.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "configure_system_logger_level",
    "get_system_logger",
    "reset_system_logger",
]

import logging
import sys
from pathlib import Path

from io_dump.constants import APP_NAME
from io_dump.utils.logging.iso_formatter import ISO8601Formatter


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts the 'message' or 'event' field from dict messages.
    """

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


# Module-level singleton logger
_system_logger: logging.Logger | None = None
_file_handler: logging.FileHandler | None = None


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Creates the logger on first call with a stderr handler only.

    Returns:
        logging.Logger: Configured system logger instance.

    Example:
        >>> logger = get_system_logger()
        >>> logger.error({"event": "sink_write_failed", "message": "disk full"})
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(logging.INFO)
    _system_logger.propagate = False  # Don't propagate to root logger

    # Close and remove any existing handlers to avoid duplicates
    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.NOTSET)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def configure_system_logger_level(level: int | str) -> None:
    """Set the verbosity of the system logger.

    Args:
        level: Logging level, as an int or a name like "DEBUG".
    """
    get_system_logger().setLevel(level)


def configure_system_logger_file(log_path: Path) -> None:
    """Attach the JSONL file handler to the system logger.

    Only the first call has an effect. The file receives WARNING and above.

    Args:
        log_path: Path to the system log file.

    Raises:
        OSError: If the log file cannot be opened.
    """
    global _file_handler

    if _file_handler is not None:
        return

    logger = get_system_logger()

    log_path.parent.mkdir(parents=True, exist_ok=True)
    if sys.platform != "win32":
        try:
            log_path.parent.chmod(0o700)
        except OSError:
            pass  # Permission changes might fail on some systems

    _file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    _file_handler.setLevel(logging.WARNING)
    _file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(_file_handler)


def reset_system_logger() -> None:
    """Close all handlers and forget the singleton. Used by tests and the CLI."""
    global _system_logger, _file_handler

    if _system_logger is not None:
        for handler in _system_logger.handlers:
            handler.close()
        _system_logger.handlers.clear()
    _system_logger = None
    _file_handler = None
