"""Config command group for io-dump CLI.

Provides configuration file subcommands.
"""

from __future__ import annotations

__all__ = ["config"]

import sys
from pathlib import Path

import click

from io_dump.config import DEFAULT_LOG_PATH, DumpConfig
from io_dump.utils.cli import load_config_or_exit

from ..styling import style_error, style_success


@click.group()
def config() -> None:
    """Configuration file commands."""
    pass


@config.command("validate")
@click.argument("config_file", type=click.Path(dir_okay=False, path_type=Path))
def config_validate(config_file: Path) -> None:
    """Validate CONFIG_FILE.

    Exit codes:
      0 - Config is valid
      1 - Config is missing or invalid
    """
    loaded = load_config_or_exit(config_file)
    click.echo(style_success(f"{config_file} is valid (log: {loaded.resolved_log_path()})"))


@config.command("show")
@click.argument("config_file", type=click.Path(dir_okay=False, path_type=Path))
def config_show(config_file: Path) -> None:
    """Print CONFIG_FILE with defaults filled in."""
    loaded = load_config_or_exit(config_file)
    click.echo(loaded.model_dump_json(indent=2))


@config.command("init")
@click.argument("config_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--log-path", default=DEFAULT_LOG_PATH, show_default=True, help="Event log file")
@click.option(
    "--mode",
    type=click.Choice(["overwrite", "append"]),
    default="overwrite",
    show_default=True,
    help="Truncate or extend an existing log",
)
@click.option(
    "--clock",
    type=click.Choice(["wall", "monotonic", "elapsed"]),
    default="wall",
    show_default=True,
    help="Timestamp source",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def config_init(config_file: Path, log_path: str, mode: str, clock: str, force: bool) -> None:
    """Write a new CONFIG_FILE."""
    if config_file.exists() and not force:
        click.echo(style_error(f"{config_file} already exists (use --force to overwrite)"), err=True)
        sys.exit(1)

    new_config = DumpConfig.model_validate({"log_path": log_path, "mode": mode, "clock": clock})
    try:
        new_config.save_to_file(config_file)
    except OSError as e:
        raise click.ClickException(f"Cannot write {config_file}: {e}") from e
    click.echo(style_success(f"Wrote {config_file}"))
