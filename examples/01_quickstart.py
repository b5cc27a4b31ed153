#!/usr/bin/env python3
"""Example: Quickstart — rolling-file-sink

Minimal working example: write a few records, look at the files and the
alias, then simulate a week going by and watch retention kick in.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install rolling-file-sink
"""
from __future__ import annotations

import os
import tempfile
from datetime import date, timedelta
from pathlib import Path

import rolling_file_sink as rfs


def main() -> None:
    print(f"rolling-file-sink version: {rfs.__version__}")

    with tempfile.TemporaryDirectory() as tmp:
        log_dir = Path(tmp)
        today = [date(2024, 1, 1)]

        # Step 1: Create a sink that keeps three days of files
        sink = rfs.RollingFileSink(log_dir / "app.log", max_files=3, clock=lambda: today[0])

        # Step 2: Log one record per day for a week
        for _ in range(7):
            sink.log("info", f"hello from {today[0].isoformat()}", {"day": today[0].day})
            today[0] += timedelta(days=1)

        # Step 3: Inspect the directory
        print(f"\nFiles in {log_dir}:")
        for path in sorted(log_dir.iterdir()):
            if path.is_symlink():
                print(f"  {path.name} -> {os.readlink(path)}")
            else:
                print(f"  {path.name}")

        print(f"\nRotations: {sink.writer.rotation_count}")
        print(f"Current file: {(log_dir / 'app.log').read_text(encoding='utf-8').strip()}")


if __name__ == "__main__":
    main()
