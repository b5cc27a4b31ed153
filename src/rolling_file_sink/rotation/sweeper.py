"""Retention sweep for dated log files.

A sweep lists the log directory, picks out the files that structurally
match ``{base}.{YYYY-MM-DD}.{ext}``, and deletes the ones that fall
outside the last ``retention_count`` calendar days.  Anything that does
not match the pattern is left alone regardless of age.

Example
-------
>>> from datetime import date
>>> from pathlib import Path
>>> sweeper = Sweeper(Path("/var/log/app"), "app", "log", retention_count=3)
>>> sweeper.sweep(today=date(2024, 1, 5))
['app.2024-01-01.log', 'app.2024-01-02.log']
"""
from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Callable

from rolling_file_sink.rotation.naming import candidate_pattern, retention_set, utc_today

logger = logging.getLogger(__name__)


class Sweeper:
    """Deletes dated log files outside the retention window.

    Parameters
    ----------
    directory:
        Directory to sweep.  Never anything outside it.
    base_name, extension:
        Components of the naming template.
    retention_count:
        Number of calendar days to keep, today included.
    clock:
        Zero-argument callable returning the current day, UTC by
        default.  Used when :meth:`sweep` is called without an explicit
        ``today``.
    """

    def __init__(
        self,
        directory: Path,
        base_name: str,
        extension: str,
        retention_count: int,
        clock: Callable[[], date] = utc_today,
    ) -> None:
        if retention_count < 1:
            raise ValueError(f"retention_count must be >= 1, got {retention_count}")
        self._directory = directory
        self._base_name = base_name
        self._extension = extension
        self._retention_count = retention_count
        self._clock = clock
        self._pattern = candidate_pattern(base_name, extension)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def sweep(self, today: date | None = None) -> list[str]:
        """Delete every candidate file not in the retention set.

        Parameters
        ----------
        today:
            Override the reference day (defaults to the clock).

        Returns
        -------
        list[str]
            Sorted names of the files that were actually deleted.  When the
            directory cannot be listed nothing is deleted and the list is
            empty.
        """
        effective_today = today or self._clock()
        names = self._list_candidates()
        if names is None:
            return []

        keep = retention_set(
            self._base_name, self._extension, effective_today, self._retention_count
        )
        deleted: list[str] = []
        for name in names:
            if name in keep:
                continue
            try:
                os.unlink(self._directory / name)
            except OSError as exc:
                logger.warning("Could not remove old log file %s: %s", name, exc)
                continue
            logger.info("Removed old log file %s", name)
            deleted.append(name)
        return deleted

    def candidates(self) -> list[str]:
        """Return the sorted dated file names currently in the directory."""
        return self._list_candidates() or []

    def is_retained(self, name: str, today: date | None = None) -> bool:
        """Return ``True`` when ``name`` would survive a sweep run on ``today``."""
        effective_today = today or self._clock()
        return name in retention_set(
            self._base_name, self._extension, effective_today, self._retention_count
        )

    @property
    def retention_count(self) -> int:
        return self._retention_count

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _list_candidates(self) -> list[str] | None:
        """List matching names, or ``None`` when the directory is unreadable."""
        try:
            with os.scandir(self._directory) as entries:
                return sorted(
                    entry.name
                    for entry in entries
                    if self._pattern.match(entry.name)
                    and not entry.is_dir(follow_symlinks=False)
                )
        except OSError as exc:
            logger.warning("Skipping sweep, cannot list %s: %s", self._directory, exc)
            return None
