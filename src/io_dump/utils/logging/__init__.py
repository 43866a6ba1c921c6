"""Logging utilities and helpers.

This package provides logging infrastructure for io-dump:
- iso_formatter: ISO 8601 timestamp formatting for JSONL logs

Import directly from submodules:
    from io_dump.utils.logging.iso_formatter import ISO8601Formatter
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
