"""Convenience API for rolling-file-sink — 3-line quickstart.

Example
-------
::

    from rolling_file_sink import RollingFileSink
    sink = RollingFileSink("/var/log/app/app.log", max_files=7)
    sink.log("info", "service started", {"port": 8080})

"""
from __future__ import annotations

import threading
from datetime import date
from pathlib import Path
from typing import Callable, Mapping

from rolling_file_sink.config.loader import RotationConfig, SinkSettings
from rolling_file_sink.formatting.formatter import RecordFormatter
from rolling_file_sink.rotation.permissions import ensure_writable_directory
from rolling_file_sink.rotation.writer import RollingWriter


class RollingFileSink:
    """Daily rolling log file with a ``current`` alias and bounded retention.

    Wraps :class:`RollingWriter` with a :class:`RecordFormatter` and a
    lock, so one instance can be shared by several threads.

    Parameters
    ----------
    filename:
        Name template, e.g. ``app.log``.  May include a directory.
    dirname:
        Directory for the log files.  Overrides the directory part of
        ``filename``.
    max_files:
        Number of calendar days of files to keep, today included.
    symlink:
        Maintain the ``{base}.{ext}`` alias.
    json, timestamp, colorize:
        Passed to :class:`RecordFormatter`.
    check_permissions:
        Verify at construction that the directory is writable.
    silent:
        Drop every record without touching the disk.
    clock:
        Zero-argument callable returning the current day.
    atomic_symlink, use_utc:
        Passed to :class:`RotationConfig`.
    rotation:
        A ready-made :class:`RotationConfig`.  When given, ``filename``,
        ``dirname``, ``max_files``, ``symlink``, ``atomic_symlink`` and
        ``use_utc`` are ignored.

    Raises
    ------
    DirectoryNotWritableError:
        When ``check_permissions`` is set and the directory is unusable.
    """

    def __init__(
        self,
        filename: str | Path = "rolling.log",
        dirname: str | Path | None = None,
        max_files: int = 10,
        symlink: bool = True,
        json: bool = True,
        timestamp: bool | Callable[[], str] = False,
        colorize: bool = False,
        check_permissions: bool = True,
        silent: bool = False,
        clock: Callable[[], date] | None = None,
        atomic_symlink: bool = False,
        use_utc: bool = True,
        rotation: RotationConfig | None = None,
    ) -> None:
        if rotation is None:
            overrides: dict[str, object] = {
                "retention_count": max_files,
                "alias_enabled": symlink,
                "atomic_alias": atomic_symlink,
                "use_utc": use_utc,
            }
            if dirname is not None:
                overrides["directory"] = Path(dirname)
            rotation = RotationConfig.from_filename(filename, **overrides)

        if check_permissions:
            ensure_writable_directory(rotation.directory)
        self._writer = RollingWriter(rotation, clock=clock)
        self._formatter = RecordFormatter(json=json, timestamp=timestamp, colorize=colorize)
        self._silent = silent
        # Re-entrant: the writer's own log calls may be routed back into this sink.
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        settings: SinkSettings,
        clock: Callable[[], date] | None = None,
    ) -> "RollingFileSink":
        """Build a sink from loaded :class:`SinkSettings`."""
        return cls(
            json=settings.format.json_output,
            timestamp=settings.format.timestamp,
            colorize=settings.format.colorize,
            check_permissions=settings.check_permissions,
            silent=settings.silent,
            clock=clock,
            rotation=settings.rotation,
        )

    # ------------------------------------------------------------------
    # Write API
    # ------------------------------------------------------------------

    def log(
        self,
        level: str,
        message: str,
        meta: Mapping[str, object] | None = None,
    ) -> Path | None:
        """Format a record and append it, newline-terminated.

        Returns
        -------
        Path | None
            The file written to, or ``None`` when the sink is silent.

        Raises
        ------
        AppendError:
            When the line could not be written.
        """
        if self._silent:
            return None
        with self._lock:
            line = self._formatter.format(level, message, meta)
            return self._writer.append_line(line)

    def write(self, data: bytes) -> Path | None:
        """Append pre-formatted bytes unchanged."""
        if self._silent:
            return None
        with self._lock:
            return self._writer.append(data)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def writer(self) -> RollingWriter:
        """The underlying :class:`RollingWriter`."""
        return self._writer

    @property
    def formatter(self) -> RecordFormatter:
        return self._formatter

    @property
    def silent(self) -> bool:
        return self._silent

    def __repr__(self) -> str:
        config = self._writer.config
        return (
            f"RollingFileSink(directory={str(config.directory)!r}, "
            f"base_name={config.base_name!r}, extension={config.extension!r}, "
            f"max_files={config.retention_count})"
        )
