"""Tests for Sweeper."""
from __future__ import annotations

import logging
import os
from datetime import date, timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from rolling_file_sink.config.loader import RotationConfig
from rolling_file_sink.rotation.naming import utc_today
from rolling_file_sink.rotation.sweeper import Sweeper
from rolling_file_sink.rotation.writer import RollingWriter


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_text("x\n", encoding="utf-8")


def _names(directory: Path) -> set[str]:
    return {p.name for p in directory.iterdir()}


def _dated(day: date) -> str:
    return f"app.{day.isoformat()}.log"


# ---------------------------------------------------------------------------
# Retention window
# ---------------------------------------------------------------------------


class TestRetention:
    def test_boundary(self, tmp_path: Path) -> None:
        # N = 3, T = 2024-01-10: T-2 kept, T-3 deleted.
        _touch(tmp_path, "app.2024-01-08.log", "app.2024-01-07.log")
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=3)
        deleted = sweeper.sweep(today=date(2024, 1, 10))
        assert deleted == ["app.2024-01-07.log"]
        assert _names(tmp_path) == {"app.2024-01-08.log"}

    def test_keeps_everything_inside_window(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app.2024-01-03.log", "app.2024-01-04.log", "app.2024-01-05.log")
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=3)
        assert sweeper.sweep(today=date(2024, 1, 5)) == []
        assert len(_names(tmp_path)) == 3

    def test_deletes_future_dated_files(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app.2024-01-05.log", "app.2030-01-01.log")
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=2)
        assert sweeper.sweep(today=date(2024, 1, 5)) == ["app.2030-01-01.log"]

    def test_deleted_list_sorted(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app.2023-12-02.log", "app.2023-12-01.log", "app.2023-11-30.log")
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=1)
        assert sweeper.sweep(today=date(2024, 1, 1)) == [
            "app.2023-11-30.log",
            "app.2023-12-01.log",
            "app.2023-12-02.log",
        ]

    def test_uses_clock_when_no_today(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app.2024-01-01.log", "app.2024-01-02.log")
        sweeper = Sweeper(tmp_path, "app", "log", 1, clock=lambda: date(2024, 1, 2))
        assert sweeper.sweep() == ["app.2024-01-01.log"]

    def test_zero_retention_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            Sweeper(tmp_path, "app", "log", retention_count=0)

    def test_default_clock_is_utc(self, tmp_path: Path) -> None:
        today = utc_today()
        _touch(tmp_path, _dated(today), _dated(today - timedelta(days=1)))
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=1)
        assert sweeper.sweep() == [_dated(today - timedelta(days=1))]
        assert (tmp_path / _dated(today)).exists()

    def test_default_clock_matches_writer(self, tmp_path: Path) -> None:
        config = RotationConfig(directory=tmp_path, base_name="app", extension="log")
        writer = RollingWriter(config)
        standalone = Sweeper(tmp_path, "app", "log", retention_count=1)
        assert standalone.is_retained(_dated(writer.today()))

    def test_is_retained(self, tmp_path: Path) -> None:
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=2)
        assert sweeper.is_retained("app.2024-01-09.log", date(2024, 1, 10))
        assert not sweeper.is_retained("app.2024-01-08.log", date(2024, 1, 10))


# ---------------------------------------------------------------------------
# Safety: non-matching files
# ---------------------------------------------------------------------------


class TestSafety:
    def test_alias_and_unrelated_files_untouched(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app.2024-01-01.log", "notes.txt")
        os.symlink("app.2024-01-01.log", tmp_path / "app.log")
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=1)

        deleted = sweeper.sweep(today=date(2024, 1, 2))

        assert deleted == ["app.2024-01-01.log"]
        assert (tmp_path / "notes.txt").exists()
        assert (tmp_path / "app.log").is_symlink()

    def test_other_log_never_deleted(self, tmp_path: Path) -> None:
        _touch(tmp_path, "other.log", "other.1999-01-01.log")
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=1)
        assert sweeper.sweep(today=date(2024, 1, 2)) == []
        assert _names(tmp_path) == {"other.log", "other.1999-01-01.log"}

    def test_prefix_sharing_files_untouched(self, tmp_path: Path) -> None:
        _touch(
            tmp_path,
            "app-old.2020-01-01.log",
            "myapp.2020-01-01.log",
            "app.2020-01-01.log.bak",
            "app.2020-01-01.txt",
        )
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=1)
        assert sweeper.sweep(today=date(2024, 1, 2)) == []
        assert len(_names(tmp_path)) == 4

    def test_matching_directory_untouched(self, tmp_path: Path) -> None:
        (tmp_path / "app.2020-01-01.log").mkdir()
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=1)
        assert sweeper.sweep(today=date(2024, 1, 2)) == []
        assert (tmp_path / "app.2020-01-01.log").is_dir()

    def test_never_touches_parent_directory(self, tmp_path: Path) -> None:
        logs = tmp_path / "logs"
        logs.mkdir()
        _touch(tmp_path, "app.2020-01-01.log")
        Sweeper(logs, "app", "log", retention_count=1).sweep(today=date(2024, 1, 2))
        assert (tmp_path / "app.2020-01-01.log").exists()


# ---------------------------------------------------------------------------
# Failure handling
# ---------------------------------------------------------------------------


class TestFailures:
    def test_missing_directory_deletes_nothing(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        sweeper = Sweeper(tmp_path / "gone", "app", "log", retention_count=1)
        with caplog.at_level(logging.WARNING):
            assert sweeper.sweep(today=date(2024, 1, 2)) == []
        assert "Skipping sweep" in caplog.text

    def test_listing_failure_deletes_nothing(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app.2020-01-01.log")
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=1)
        with patch(
            "rolling_file_sink.rotation.sweeper.os.scandir",
            side_effect=PermissionError("denied"),
        ):
            assert sweeper.sweep(today=date(2024, 1, 2)) == []
        assert (tmp_path / "app.2020-01-01.log").exists()

    def test_single_deletion_failure_does_not_abort(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        _touch(tmp_path, "app.2020-01-01.log", "app.2020-01-02.log", "app.2020-01-03.log")
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=1)
        real_unlink = os.unlink

        def flaky_unlink(path: Path) -> None:
            if Path(path).name == "app.2020-01-02.log":
                raise FileNotFoundError("removed by someone else")
            real_unlink(path)

        with patch(
            "rolling_file_sink.rotation.sweeper.os.unlink", side_effect=flaky_unlink
        ), caplog.at_level(logging.WARNING):
            deleted = sweeper.sweep(today=date(2024, 1, 2))

        assert deleted == ["app.2020-01-01.log", "app.2020-01-03.log"]
        assert "Could not remove old log file app.2020-01-02.log" in caplog.text


# ---------------------------------------------------------------------------
# candidates
# ---------------------------------------------------------------------------


class TestCandidates:
    def test_lists_only_matching_sorted(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app.2024-01-02.log", "app.2024-01-01.log", "notes.txt")
        sweeper = Sweeper(tmp_path, "app", "log", retention_count=5)
        assert sweeper.candidates() == ["app.2024-01-01.log", "app.2024-01-02.log"]

    def test_missing_directory_empty(self, tmp_path: Path) -> None:
        assert Sweeper(tmp_path / "nope", "app", "log", 1).candidates() == []
