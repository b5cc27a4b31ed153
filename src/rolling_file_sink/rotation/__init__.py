"""Rotation and retention core.

Provides the date-partitioned :class:`RollingWriter` and the pieces it
drives on every rotation: the alias link and the retention sweep.
"""
from __future__ import annotations

from rolling_file_sink.rotation.alias import AliasManager
from rolling_file_sink.rotation.naming import (
    active_file_name,
    alias_file_name,
    candidate_pattern,
    retention_set,
    split_filename,
    utc_today,
)
from rolling_file_sink.rotation.permissions import ensure_writable_directory
from rolling_file_sink.rotation.sweeper import Sweeper
from rolling_file_sink.rotation.writer import ActiveFileState, RollingWriter

__all__ = [
    "ActiveFileState",
    "AliasManager",
    "RollingWriter",
    "Sweeper",
    "active_file_name",
    "alias_file_name",
    "candidate_pattern",
    "ensure_writable_directory",
    "retention_set",
    "split_filename",
    "utc_today",
]
