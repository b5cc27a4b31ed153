"""Turns a level, a message and optional metadata into a log line.

Two output styles are supported:

- JSON (default): ``{"level": ..., "message": ..., "timestamp": ..., "meta": {...}}``.
  ``bytes`` values are written as base64 strings.
- Plain text: ``"{timestamp} - {level}: {message} {meta as JSON}"``, with
  the level optionally colourised for terminals that tail the file.  A
  ``meta["exception"]`` traceback is written on the lines that follow.

Example
-------
>>> formatter = RecordFormatter(json=False)
>>> formatter.format("info", "service started")
'info: service started'
"""
from __future__ import annotations

import base64
import json as jsonlib
from datetime import datetime
from typing import Callable, Mapping

from rich.console import Console
from rich.text import Text

# Level name -> rich style.  Unknown levels are left unstyled.
_LEVEL_STYLES: dict[str, str] = {
    "critical": "bold red",
    "error": "red",
    "warning": "yellow",
    "warn": "yellow",
    "info": "green",
    "verbose": "cyan",
    "debug": "blue",
    "silly": "magenta",
}

_TIMESTAMP_FORMAT = "%b %d %Y %H:%M:%S"


def default_timestamp() -> str:
    """Local time as ``Jan 01 2024 12:00:00``."""
    return datetime.now().strftime(_TIMESTAMP_FORMAT)


def _encode_default(value: object) -> object:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return str(value)


class RecordFormatter:
    """Formats log records for the rolling file sink.

    Parameters
    ----------
    json:
        Emit one JSON object per record instead of plain text.
    timestamp:
        ``False`` for no timestamp, ``True`` for :func:`default_timestamp`,
        or a zero-argument callable returning the timestamp string.
    colorize:
        Wrap the level in ANSI colour codes (plain text mode only).
    """

    def __init__(
        self,
        json: bool = True,
        timestamp: bool | Callable[[], str] = False,
        colorize: bool = False,
    ) -> None:
        self._json = json
        if callable(timestamp):
            self._timestamp: Callable[[], str] | None = timestamp
        elif timestamp:
            self._timestamp = default_timestamp
        else:
            self._timestamp = None
        self._colorize = colorize
        self._console = Console(
            force_terminal=True,
            color_system="standard",
            highlight=False,
            width=1000,
        )

    def format(
        self,
        level: str,
        message: str,
        meta: Mapping[str, object] | None = None,
    ) -> str:
        """Render a record.  The result has no trailing newline."""
        timestamp = self._timestamp() if self._timestamp else None

        if self._json:
            output: dict[str, object] = {"level": level, "message": message}
            if timestamp:
                output["timestamp"] = timestamp
            if meta:
                output["meta"] = dict(meta)
            return jsonlib.dumps(output, default=_encode_default)

        prefix = f"{timestamp} - " if timestamp else ""
        rendered_level = self.colorize_level(level) if self._colorize else level
        line = f"{prefix}{rendered_level}: {message}"

        fields = dict(meta or {})
        exception = fields.pop("exception", None)
        if fields:
            line += " " + jsonlib.dumps(fields, default=_encode_default)
        if exception:
            # Traceback goes on the following lines, as logging.Formatter does.
            line += "\n" + str(exception).rstrip("\n")
        return line

    def colorize_level(self, level: str) -> str:
        """Return ``level`` wrapped in ANSI escape codes."""
        style = _LEVEL_STYLES.get(level.lower())
        if style is None:
            return level
        with self._console.capture() as capture:
            self._console.print(Text(level, style=style), end="", soft_wrap=True)
        return capture.get()

    @property
    def json(self) -> bool:
        return self._json
