"""Construction-time validation of the log directory."""
from __future__ import annotations

import os
from pathlib import Path

from rolling_file_sink.errors import DirectoryNotWritableError


def ensure_writable_directory(directory: Path | str) -> Path:
    """Return ``directory`` as a :class:`Path` once it is known to be usable.

    The process must be able to create entries in the directory, which on
    POSIX needs both write and search permission.

    Raises
    ------
    DirectoryNotWritableError:
        When the directory is missing, is not a directory, or is not
        writable by the current process.
    """
    path = Path(directory)
    if not path.exists():
        raise DirectoryNotWritableError(path, "directory does not exist")
    if not path.is_dir():
        raise DirectoryNotWritableError(path, "not a directory")
    if not os.access(path, os.W_OK | os.X_OK):
        raise DirectoryNotWritableError(path, "permission denied")
    return path
