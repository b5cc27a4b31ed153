"""Sink configuration loader with Pydantic v2 validation.

Loads and validates a ``sink.yaml`` file into a typed
:class:`SinkSettings` object.  Unknown keys are allowed so that older
binaries keep reading newer files.

Example
-------
>>> loader = ConfigLoader()
>>> settings = loader.load_string('''
... rotation:
...   directory: /var/log/app
...   base_name: app
...   extension: log
...   retention_count: 3
... ''')
>>> settings.rotation.retention_count
3
"""
from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from rolling_file_sink.rotation.naming import split_filename


class RotationConfig(BaseModel):
    """Immutable settings for the rotation and retention core."""

    model_config = {"frozen": True, "extra": "allow"}

    directory: Path = Field(default=Path("./logs"))
    base_name: str = Field(default="rolling", min_length=1)
    extension: str = Field(default="log", min_length=1)
    retention_count: int = Field(default=10, ge=1)
    alias_enabled: bool = Field(default=True)
    atomic_alias: bool = Field(default=False)
    use_utc: bool = Field(default=True)

    @field_validator("base_name", "extension")
    @classmethod
    def validate_name_part(cls, value: str) -> str:
        if os.sep in value or (os.altsep and os.altsep in value):
            raise ValueError(f"'{value}' must be a plain file name component")
        if value in (".", ".."):
            raise ValueError(f"'{value}' is not a valid file name component")
        return value

    @classmethod
    def from_filename(cls, filename: str | Path, **kwargs: object) -> "RotationConfig":
        """Build a config from a template such as ``/var/log/app.log``.

        The directory part becomes ``directory`` unless one is passed
        explicitly in ``kwargs``.
        """
        path = Path(filename)
        base_name, extension = split_filename(path.name)
        kwargs.setdefault("directory", path.parent)
        return cls(base_name=base_name, extension=extension, **kwargs)  # type: ignore[arg-type]


class FormatConfig(BaseModel):
    """Record formatting options."""

    model_config = {"extra": "allow", "populate_by_name": True}

    json_output: bool = Field(default=True, alias="json")
    timestamp: bool = Field(default=False)
    colorize: bool = Field(default=False)


class SinkSettings(BaseModel):
    """Top-level sink configuration schema.

    Loaded from ``sink.yaml``.  All sections are optional and fall back
    to sensible defaults.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    rotation: RotationConfig = Field(default_factory=RotationConfig)
    format: FormatConfig = Field(default_factory=FormatConfig)
    check_permissions: bool = Field(default=True)
    silent: bool = Field(default=False)


class ConfigLoader:
    """Loads and validates sink YAML configuration.

    Example
    -------
    >>> loader = ConfigLoader()
    >>> settings = loader.load(Path("sink.yaml"))
    """

    def load(self, config_path: Path) -> SinkSettings:
        """Load and validate a sink YAML file.

        Parameters
        ----------
        config_path:
            Path to the ``sink.yaml`` file.

        Returns
        -------
        SinkSettings
            Validated configuration object.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        ValueError:
            When the YAML content fails Pydantic validation.
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Sink config not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as fh:
            raw: dict[str, object] = yaml.safe_load(fh) or {}

        return SinkSettings.model_validate(raw)

    def load_string(self, yaml_content: str) -> SinkSettings:
        """Load and validate a YAML string directly."""
        raw: dict[str, object] = yaml.safe_load(yaml_content) or {}
        return SinkSettings.model_validate(raw)

    def defaults(self) -> SinkSettings:
        """Return a default configuration with all defaults applied."""
        return SinkSettings()
