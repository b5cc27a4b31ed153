"""Maintenance of the undated ``{base}.{ext}`` alias.

The alias is a symbolic link with a *relative* target, so the directory
can be moved or mounted elsewhere without breaking it.  Refreshing is
idempotent: when the link already points at the requested file nothing
on disk changes.

Example
-------
>>> from pathlib import Path
>>> manager = AliasManager(Path("/var/log/app"), "app", "log")
>>> manager.refresh(Path("/var/log/app/app.2024-01-01.log"))
True
>>> manager.current_target()
'app.2024-01-01.log'
"""
from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from rolling_file_sink.rotation.naming import alias_file_name

logger = logging.getLogger(__name__)


class AliasManager:
    """Creates and repairs the symbolic link to the active log file.

    Parameters
    ----------
    directory:
        Directory that holds both the alias and the dated files.
    base_name, extension:
        Components of the naming template.  The alias is named
        ``{base_name}.{extension}``.
    enabled:
        When ``False``, :meth:`refresh` is a no-op.
    atomic:
        Swap an outdated link by renaming a freshly created temporary link
        over it instead of removing and recreating it.  The default
        remove-then-create swap leaves a short window with no alias.
    """

    def __init__(
        self,
        directory: Path,
        base_name: str,
        extension: str,
        enabled: bool = True,
        atomic: bool = False,
    ) -> None:
        self._directory = directory
        self._alias_path = directory / alias_file_name(base_name, extension)
        self._enabled = enabled
        self._atomic = atomic

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def refresh(self, target_path: Path) -> bool:
        """Point the alias at ``target_path``.

        Parameters
        ----------
        target_path:
            The active log file.  Only its name is written into the link.

        Returns
        -------
        bool
            ``True`` when the filesystem was changed.  Failures are logged
            as warnings and reported as ``False``; they are never raised.
        """
        if not self._enabled:
            return False

        target_name = target_path.name
        link_name = self._alias_path.name
        try:
            if self._alias_path.is_symlink():
                old_target = os.readlink(self._alias_path)
                if old_target == target_name:
                    return False
                if self._atomic:
                    self._swap_atomically(target_name)
                    logger.info("Replaced link %s => %s (was %s)", link_name, target_name, old_target)
                    return True
                logger.info("Removing old link %s => %s", link_name, old_target)
                self._alias_path.unlink()
            elif self._alias_path.exists():
                logger.warning(
                    "Not creating link %s: a regular file or directory already uses that name",
                    self._alias_path,
                )
                return False

            logger.info("Creating link %s => %s", link_name, target_name)
            os.symlink(target_name, self._alias_path)
            return True
        except OSError as exc:
            logger.warning("Could not refresh link %s => %s: %s", link_name, target_name, exc)
            return False

    def current_target(self) -> str | None:
        """Return the link target name, or ``None`` when there is no alias."""
        if not self._alias_path.is_symlink():
            return None
        try:
            return os.readlink(self._alias_path)
        except OSError:
            return None

    @property
    def alias_path(self) -> Path:
        """Full path of the alias link."""
        return self._alias_path

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _swap_atomically(self, target_name: str) -> None:
        temp_path = self._directory / f".{self._alias_path.name}.{uuid.uuid4().hex}.tmp"
        os.symlink(target_name, temp_path)
        try:
            os.replace(temp_path, self._alias_path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
