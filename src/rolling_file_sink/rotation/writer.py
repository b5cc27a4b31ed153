"""Date-partitioned append-only writer.

:class:`RollingWriter` appends raw bytes to ``{base}.{YYYY-MM-DD}.{ext}``
in the configured directory.  The first append after the day changes is
a *rotation event*: the alias is refreshed and a retention sweep runs,
once, right after the bytes have been written.

The writer does no locking.  Callers must serialise calls to
:meth:`RollingWriter.append`, either by using a single thread or by
holding a lock of their own (:class:`~rolling_file_sink.handler.RollingFileHandler`
does the latter).

Example
-------
>>> from pathlib import Path
>>> from rolling_file_sink.config import RotationConfig
>>> config = RotationConfig(directory=Path("/var/log/app"), base_name="app", extension="log")
>>> writer = RollingWriter(config)
>>> writer.append_line("hello")
PosixPath('/var/log/app/app.2024-01-01.log')
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from rolling_file_sink.errors import AppendError
from rolling_file_sink.rotation.alias import AliasManager
from rolling_file_sink.rotation.naming import active_file_name, utc_today
from rolling_file_sink.rotation.sweeper import Sweeper

if TYPE_CHECKING:
    from rolling_file_sink.config.loader import RotationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveFileState:
    """The file the writer is currently appending to.

    Replaced as a whole on every rotation, never updated field by field.
    """

    path: Path | None = None
    day: date | None = None


class RollingWriter:
    """Appends bytes to the current day's log file.

    Parameters
    ----------
    config:
        Rotation settings.  The directory is assumed to exist and be
        writable; see :func:`~rolling_file_sink.rotation.permissions.ensure_writable_directory`.
    clock:
        Zero-argument callable returning the current day.  Defaults to the
        UTC day when ``config.use_utc`` is set, the local day otherwise.
    alias_manager, sweeper:
        Override the rotation collaborators (mostly useful in tests).
    """

    def __init__(
        self,
        config: RotationConfig,
        clock: Callable[[], date] | None = None,
        alias_manager: AliasManager | None = None,
        sweeper: Sweeper | None = None,
    ) -> None:
        self._config = config
        self._clock: Callable[[], date] = clock or (utc_today if config.use_utc else date.today)
        self._alias_manager = alias_manager or AliasManager(
            config.directory,
            config.base_name,
            config.extension,
            enabled=config.alias_enabled,
            atomic=config.atomic_alias,
        )
        self._sweeper = sweeper or Sweeper(
            config.directory,
            config.base_name,
            config.extension,
            config.retention_count,
            clock=self._clock,
        )
        self._state = ActiveFileState()
        self._rotation_count = 0

    # ------------------------------------------------------------------
    # Write API
    # ------------------------------------------------------------------

    def append(self, data: bytes) -> Path:
        """Append ``data`` to the active file, rotating first if the day changed.

        Parameters
        ----------
        data:
            Already formatted bytes.  Written as-is.

        Returns
        -------
        Path
            The file the bytes were written to.

        Raises
        ------
        AppendError:
            When the file could not be opened or written.  The writer state
            is kept, so the next append retries the same path.
        """
        day = self._clock()
        candidate = self._config.directory / active_file_name(
            self._config.base_name, self._config.extension, day
        )

        rotated = candidate != self._state.path
        if rotated:
            # Record the new path before any side effect so a failure below
            # never causes the rotation to be replayed for this day.
            self._state = ActiveFileState(path=candidate, day=day)
            self._rotation_count += 1

        try:
            with candidate.open("ab") as fh:
                fh.write(data)
                fh.flush()
        except OSError as exc:
            raise AppendError(candidate, str(exc)) from exc

        if rotated:
            logger.info("Rotated log to %s", candidate)
            self._after_rotation(candidate, day)
        return candidate

    def append_line(self, text: str) -> Path:
        """Encode ``text`` as UTF-8, terminate it with a newline and append it."""
        return self.append((text + "\n").encode("utf-8"))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def today(self) -> date:
        """The current day according to the writer's clock."""
        return self._clock()

    @property
    def state(self) -> ActiveFileState:
        """Snapshot of the active file state."""
        return self._state

    @property
    def current_path(self) -> Path | None:
        return self._state.path

    @property
    def rotation_count(self) -> int:
        """Number of rotation events since construction."""
        return self._rotation_count

    @property
    def config(self) -> RotationConfig:
        return self._config

    @property
    def alias_manager(self) -> AliasManager:
        return self._alias_manager

    @property
    def sweeper(self) -> Sweeper:
        return self._sweeper

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _after_rotation(self, path: Path, day: date) -> None:
        """Refresh the alias, then sweep.  Never raises."""
        try:
            self._alias_manager.refresh(path)
        except Exception as exc:
            logger.warning("Link refresh failed after rotating to %s: %s", path, exc)
        try:
            self._sweeper.sweep(day)
        except Exception as exc:
            logger.warning("Retention sweep failed after rotating to %s: %s", path, exc)
