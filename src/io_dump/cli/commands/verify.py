"""Verify command for io-dump CLI.

Decodes an entire log file to check that every frame is complete.
"""

from __future__ import annotations

__all__ = ["verify"]

import sys
from pathlib import Path

import click

from io_dump.exceptions import IoDumpError
from io_dump.utils.cli import describe_decode_error, open_log_or_exit

from ..styling import style_error, style_success


@click.command()
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def verify(log_file: Path) -> None:
    """Check that LOG_FILE decodes completely.

    Exit codes:
      0 - Every frame decoded
      1 - Truncated or invalid frame found
    """
    count = 0
    with open_log_or_exit(log_file) as reader:
        try:
            for _ in reader:
                count += 1
        except IoDumpError as e:
            click.echo(style_error(f"{log_file}: {describe_decode_error(e)} after {count} events"), err=True)
            sys.exit(1)
        end_offset = reader.offset

    click.echo(style_success(f"{log_file}: {count} events, {end_offset} bytes, intact"))
