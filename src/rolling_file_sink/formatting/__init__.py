"""Record formatting for the rolling file sink."""
from __future__ import annotations

from rolling_file_sink.formatting.formatter import RecordFormatter, default_timestamp

__all__ = ["RecordFormatter", "default_timestamp"]
