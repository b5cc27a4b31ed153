"""Configuration models and YAML loader."""
from __future__ import annotations

from rolling_file_sink.config.loader import (
    ConfigLoader,
    FormatConfig,
    RotationConfig,
    SinkSettings,
)

__all__ = ["ConfigLoader", "FormatConfig", "RotationConfig", "SinkSettings"]
