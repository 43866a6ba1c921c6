"""Show command for io-dump CLI.

Prints the events of a log file as a hex dump or as JSON lines.
"""

from __future__ import annotations

__all__ = ["show"]

import itertools
import json
from pathlib import Path

import click

from io_dump.exceptions import IoDumpError
from io_dump.render import render_events
from io_dump.utils.cli import describe_decode_error, open_log_or_exit


@click.command()
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "jsonl"]),
    default="text",
    show_default=True,
    help="Hex dump text or one JSON object per event",
)
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Show at most N events")
@click.option(
    "--origin",
    type=click.Choice(["first", "zero"]),
    default="first",
    show_default=True,
    help="Measure text times from the first event, or from timestamp 0",
)
def show(log_file: Path, output_format: str, limit: int | None, origin: str) -> None:
    """Print the events recorded in LOG_FILE.

    \b
    Text format:
      ->  marks data read from the handle
      <-  marks data written to the handle
    Times are seconds since the first event. For logs recorded with the
    "elapsed" clock, --origin zero shows time since the wrapper was
    created instead.
    """
    origin_ns = 0 if origin == "zero" else None
    with open_log_or_exit(log_file) as reader:
        events = itertools.islice(reader, limit)
        try:
            if output_format == "jsonl":
                for event in events:
                    click.echo(json.dumps(event.to_log_record()))
            else:
                for chunk in render_events(events, origin_ns):
                    click.echo(chunk, nl=False)
        except IoDumpError as e:
            raise click.ClickException(f"{log_file}: {describe_decode_error(e)}") from e
