"""Tests for ConfigLoader and the configuration models."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from rolling_file_sink.config.loader import (
    ConfigLoader,
    FormatConfig,
    RotationConfig,
    SinkSettings,
)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_defaults_returns_settings(self) -> None:
        assert isinstance(ConfigLoader().defaults(), SinkSettings)

    def test_default_rotation(self) -> None:
        rotation = ConfigLoader().defaults().rotation
        assert rotation.directory == Path("./logs")
        assert rotation.base_name == "rolling"
        assert rotation.extension == "log"
        assert rotation.retention_count == 10
        assert rotation.alias_enabled is True
        assert rotation.atomic_alias is False
        assert rotation.use_utc is True

    def test_default_format(self) -> None:
        fmt = ConfigLoader().defaults().format
        assert fmt.json_output is True
        assert fmt.timestamp is False
        assert fmt.colorize is False

    def test_default_flags(self) -> None:
        settings = ConfigLoader().defaults()
        assert settings.check_permissions is True
        assert settings.silent is False


# ---------------------------------------------------------------------------
# RotationConfig validation
# ---------------------------------------------------------------------------


class TestRotationConfig:
    def test_is_frozen(self) -> None:
        config = RotationConfig()
        with pytest.raises(ValidationError):
            config.retention_count = 5  # type: ignore[misc]

    def test_retention_count_minimum(self) -> None:
        with pytest.raises(ValidationError):
            RotationConfig(retention_count=0)

    @pytest.mark.parametrize("value", ["", "a/b", "..", "."])
    def test_bad_base_name(self, value: str) -> None:
        with pytest.raises(ValidationError):
            RotationConfig(base_name=value)

    def test_bad_extension(self) -> None:
        with pytest.raises(ValidationError):
            RotationConfig(extension="x/y")

    def test_from_filename(self) -> None:
        config = RotationConfig.from_filename("/var/log/app/server.log", retention_count=3)
        assert config.directory == Path("/var/log/app")
        assert config.base_name == "server"
        assert config.extension == "log"
        assert config.retention_count == 3

    def test_from_filename_directory_override(self, tmp_path: Path) -> None:
        config = RotationConfig.from_filename("server.log", directory=tmp_path)
        assert config.directory == tmp_path

    def test_from_filename_without_extension(self) -> None:
        with pytest.raises(ValueError):
            RotationConfig.from_filename("server")


class TestFormatConfig:
    def test_json_alias(self) -> None:
        assert FormatConfig.model_validate({"json": False}).json_output is False

    def test_field_name_accepted(self) -> None:
        assert FormatConfig(json_output=False).json_output is False


# ---------------------------------------------------------------------------
# Loading YAML
# ---------------------------------------------------------------------------


class TestLoad:
    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "sink.yaml"
        path.write_text(
            textwrap.dedent(
                """\
                rotation:
                  directory: /srv/logs
                  base_name: api
                  extension: jsonl
                  retention_count: 14
                  alias_enabled: false
                format:
                  json: true
                  timestamp: true
                silent: true
                """
            ),
            encoding="utf-8",
        )
        settings = ConfigLoader().load(path)
        assert settings.rotation.directory == Path("/srv/logs")
        assert settings.rotation.base_name == "api"
        assert settings.rotation.extension == "jsonl"
        assert settings.rotation.retention_count == 14
        assert settings.rotation.alias_enabled is False
        assert settings.format.timestamp is True
        assert settings.silent is True

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load(tmp_path / "missing.yaml")

    def test_empty_string_gives_defaults(self) -> None:
        assert ConfigLoader().load_string("") == SinkSettings()

    def test_invalid_values_raise_value_error(self) -> None:
        with pytest.raises(ValueError):
            ConfigLoader().load_string("rotation:\n  retention_count: -1\n")

    def test_unknown_keys_allowed(self) -> None:
        settings = ConfigLoader().load_string("future_option: 1\nrotation:\n  other: 2\n")
        assert settings.rotation.retention_count == 10
