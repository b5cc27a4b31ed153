"""Standard library :mod:`logging` adapter.

Example
-------
>>> import logging
>>> from rolling_file_sink import RollingFileHandler, RollingFileSink
>>> handler = RollingFileHandler(RollingFileSink("/var/log/app/app.log"))
>>> logging.getLogger("app").addHandler(handler)
>>> logging.getLogger("app").warning("disk at %d%%", 91, extra={"host": "web-1"})
"""
from __future__ import annotations

import logging

from rolling_file_sink.convenience import RollingFileSink

# Attributes every LogRecord carries.  Anything else arrived through ``extra``.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def record_meta(record: logging.LogRecord) -> dict[str, object]:
    """Return the ``extra`` fields attached to ``record``."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class RollingFileHandler(logging.Handler):
    """Routes log records into a :class:`RollingFileSink`.

    Write failures go through :meth:`logging.Handler.handleError`, the same
    as every other standard handler.

    Parameters
    ----------
    sink:
        Destination sink.
    level:
        Minimum level handled.
    """

    def __init__(self, sink: RollingFileSink, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._sink = sink
        self._exc_formatter = logging.Formatter()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            meta = record_meta(record)
            if record.exc_info:
                meta["exception"] = self._exc_formatter.formatException(record.exc_info)
            self._sink.log(record.levelname.lower(), record.getMessage(), meta)
        except Exception:
            self.handleError(record)

    @property
    def sink(self) -> RollingFileSink:
        return self._sink
