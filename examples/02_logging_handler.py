#!/usr/bin/env python3
"""Example: Standard library logging — rolling-file-sink

Attach a RollingFileHandler to a logger and write plain-text lines with
timestamps.

Usage:
    python examples/02_logging_handler.py

Requirements:
    pip install rolling-file-sink
"""
from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from rolling_file_sink import RollingFileHandler, RollingFileSink


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        sink = RollingFileSink(Path(tmp) / "service.log", json=False, timestamp=True)
        handler = RollingFileHandler(sink, level=logging.INFO)

        log = logging.getLogger("service")
        log.setLevel(logging.DEBUG)
        log.addHandler(handler)

        log.debug("not written: below handler level")
        log.info("service started on port %d", 8080)
        log.warning("cache miss ratio high", extra={"ratio": 0.42})

        print((Path(tmp) / "service.log").read_text(encoding="utf-8"))


if __name__ == "__main__":
    main()
