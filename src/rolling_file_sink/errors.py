"""Exception hierarchy for rolling-file-sink.

Only :class:`AppendError` is ever raised out of an append.  Alias and
retention maintenance failures are logged as warnings instead.
"""
from __future__ import annotations

from pathlib import Path


class RollingFileError(Exception):
    """Base class for every error raised by this package."""


class DirectoryNotWritableError(RollingFileError):
    """Raised at construction time when the log directory is unusable.

    Attributes
    ----------
    directory:
        The directory that failed validation.
    reason:
        Short explanation of what is wrong with it.
    """

    def __init__(self, directory: Path, reason: str) -> None:
        self.directory = directory
        self.reason = reason
        super().__init__(f'Cannot create logs in directory "{directory}": {reason}')


class AppendError(RollingFileError):
    """Raised when bytes could not be appended to the active log file.

    The underlying :class:`OSError` is chained as ``__cause__``.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to append to {path}: {message}")
