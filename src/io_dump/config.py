"""Configuration for io-dump.

A JSON config file describes where the event log goes and how it is written.
The CLI validates config files; applications build a wrapper from one with
io_dump.dump.open_dump().

Example config:
    {
        "log_path": "~/captures/session.bin",
        "mode": "overwrite",
        "clock": "wall",
        "flush_each_event": false,
        "logging": {"log_level": "INFO", "system_log_path": null}
    }

Example usage:
    config = DumpConfig.load_from_file(config_path)
    with open_dump(handle, config) as stream:
        ...
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_LOG_PATH",
    "DumpConfig",
    "LoggingConfig",
]

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from io_dump.constants import DEFAULT_LOG_DIR, DEFAULT_LOG_FILENAME
from io_dump.exceptions import ConfigurationError

DEFAULT_LOG_PATH = str(Path(DEFAULT_LOG_DIR) / DEFAULT_LOG_FILENAME)


class LoggingConfig(BaseModel):
    """Operational (system) logging settings.

    Attributes:
        log_level: Minimum level shown on stderr.
        system_log_path: Optional JSONL file receiving WARNING and above.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    system_log_path: str | None = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="forbid")


class DumpConfig(BaseModel):
    """How an event log is written.

    Attributes:
        log_path: Event log file. "~" is expanded.
        mode: "overwrite" truncates an existing log, "append" adds to it.
        clock: Timestamp source: "wall" (ns since Unix epoch), "monotonic",
            or "elapsed" (ns since the wrapper was created).
        flush_each_event: Flush the log file after every event.
        logging: System logger settings.
    """

    log_path: str = Field(default=DEFAULT_LOG_PATH, min_length=1)
    mode: Literal["overwrite", "append"] = "overwrite"
    clock: Literal["wall", "monotonic", "elapsed"] = "wall"
    flush_each_event: bool = False
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    def resolved_log_path(self) -> Path:
        """Event log path with "~" expanded."""
        return Path(self.log_path).expanduser()

    @classmethod
    def load_from_file(cls, path: Path) -> DumpConfig:
        """Load and validate a JSON config file.

        Args:
            path: Config file path.

        Returns:
            DumpConfig: Validated configuration.

        Raises:
            ConfigurationError: File missing, unreadable, not JSON, or invalid.
        """
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"Invalid config file {path}: {errors}") from e

    def save_to_file(self, path: Path) -> None:
        """Write this configuration as indented JSON, creating parent directories.

        Raises:
            OSError: If the file cannot be written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2) + "\n", encoding="utf-8")
