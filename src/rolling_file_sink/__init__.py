"""rolling-file-sink — date-partitioned log files with a current-log alias and bounded retention.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import rolling_file_sink as rfs
>>> rfs.__version__
'0.1.0'
>>> sink = rfs.RollingFileSink("/var/log/app/app.log", max_files=3)
>>> sink.log("info", "hello")
PosixPath('/var/log/app/app.2024-01-01.log')
"""
from __future__ import annotations

__version__: str = "0.1.0"

from rolling_file_sink.convenience import RollingFileSink
from rolling_file_sink.handler import RollingFileHandler

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
from rolling_file_sink.errors import (
    AppendError,
    DirectoryNotWritableError,
    RollingFileError,
)

# ---------------------------------------------------------------------------
# Rotation core
# ---------------------------------------------------------------------------
from rolling_file_sink.rotation.alias import AliasManager
from rolling_file_sink.rotation.naming import (
    active_file_name,
    alias_file_name,
    candidate_pattern,
    retention_set,
)
from rolling_file_sink.rotation.permissions import ensure_writable_directory
from rolling_file_sink.rotation.sweeper import Sweeper
from rolling_file_sink.rotation.writer import ActiveFileState, RollingWriter

# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------
from rolling_file_sink.formatting.formatter import RecordFormatter

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from rolling_file_sink.config.loader import (
    ConfigLoader,
    FormatConfig,
    RotationConfig,
    SinkSettings,
)

__all__ = [
    "__version__",
    "RollingFileHandler",
    "RollingFileSink",
    # Errors
    "AppendError",
    "DirectoryNotWritableError",
    "RollingFileError",
    # Rotation core
    "ActiveFileState",
    "AliasManager",
    "RollingWriter",
    "Sweeper",
    "active_file_name",
    "alias_file_name",
    "candidate_pattern",
    "ensure_writable_directory",
    "retention_set",
    # Formatting
    "RecordFormatter",
    # Configuration
    "ConfigLoader",
    "FormatConfig",
    "RotationConfig",
    "SinkSettings",
]
