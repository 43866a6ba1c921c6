"""JSONL formatting for the system log file.

Each record becomes one JSON object whose first fields are an ISO 8601 UTC
timestamp with milliseconds and the level name.
"""

from __future__ import annotations

__all__ = ["ISO8601Formatter", "format_iso_timestamp"]

import json
import logging
from datetime import datetime, timezone


def format_iso_timestamp(epoch_seconds: float) -> str:
    """Format a POSIX timestamp as YYYY-MM-DDTHH:MM:SS.sssZ (UTC)."""
    return (
        datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class ISO8601Formatter(logging.Formatter):
    """Formatter emitting JSONL with ISO 8601 timestamps (UTC).

    Example line:
        {"time": "2025-12-04T10:48:37.123Z", "level": "ERROR", "event": "sink_write_failed", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a single JSON line.

        Dict messages are merged in as structured fields; anything else is
        stored under "message".

        Args:
            record: The log record to format.

        Returns:
            str: JSON-formatted log entry.
        """
        if isinstance(record.msg, dict):
            log_data = dict(record.msg)
        else:
            log_data = {"message": record.getMessage()}

        if record.exc_info:
            log_data["exc_info"] = self.formatException(record.exc_info)

        log_entry = {
            "time": format_iso_timestamp(record.created),
            "level": record.levelname,
            **log_data,
        }
        return json.dumps(log_entry, default=str)
