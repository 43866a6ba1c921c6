"""Main CLI entry point for io-dump.

Defines the CLI group and registers all subcommands.

Commands:
    config  - Configuration files (init, show, validate)
    show    - Print the events of a log
    stats   - Summarize a log
    verify  - Check that a log decodes completely

Subcommand help:
    io-dump COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys

import click

from io_dump import __version__

from .commands.config import config
from .commands.show import show
from .commands.stats import stats
from .commands.verify import verify


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """io-dump: inspect logs of recorded I/O traffic."""
    if version:
        click.echo(f"io-dump {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(config)
cli.add_command(show)
cli.add_command(stats)
cli.add_command(verify)


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
