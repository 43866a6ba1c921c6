"""Unit tests for configuration loading.

Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from io_dump.config import DEFAULT_LOG_PATH, DumpConfig, LoggingConfig
from io_dump.exceptions import ConfigurationError


class TestDefaults:
    def test_defaults(self) -> None:
        config = DumpConfig()

        assert config.log_path == DEFAULT_LOG_PATH
        assert config.mode == "overwrite"
        assert config.clock == "wall"
        assert config.flush_each_event is False
        assert config.logging == LoggingConfig()

    def test_resolved_log_path_expands_home(self) -> None:
        config = DumpConfig(log_path="~/captures/x.bin")

        assert config.resolved_log_path() == Path.home() / "captures" / "x.bin"


class TestValidation:
    """Invalid values are rejected by the models."""

    @pytest.mark.parametrize(
        "data",
        [
            {"mode": "rotate"},
            {"clock": "tai"},
            {"log_path": ""},
            {"unknown": 1},
            {"logging": {"log_level": "TRACE"}},
            {"logging": {"extra": True}},
        ],
    )
    def test_rejects(self, data: dict) -> None:
        with pytest.raises(ValidationError):
            DumpConfig.model_validate(data)


class TestFileRoundTrip:
    """Tests for load_from_file and save_to_file."""

    def test_save_then_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.json"
        config = DumpConfig(log_path="/tmp/a.bin", mode="append", clock="monotonic")

        config.save_to_file(path)

        assert DumpConfig.load_from_file(path) == config

    def test_saved_file_is_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"

        DumpConfig().save_to_file(path)

        data = json.loads(path.read_text())
        assert data["mode"] == "overwrite"
        assert data["logging"]["log_level"] == "INFO"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Config file not found"):
            DumpConfig.load_from_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            DumpConfig.load_from_file(path)

    def test_invalid_field_names_location(self, tmp_path: Path) -> None:
        """Validation errors name the offending field."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"logging": {"log_level": "LOUD"}}))

        with pytest.raises(ConfigurationError, match=r"logging\.log_level"):
            DumpConfig.load_from_file(path)
