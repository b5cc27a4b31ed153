"""File naming rules for date-partitioned logs.

Active files are named ``{base}.{YYYY-MM-DD}.{ext}`` and the alias is
``{base}.{ext}``.  Nothing here touches the filesystem, and apart from
:func:`utc_today` everything is a pure function of its arguments.

Example
-------
>>> from datetime import date
>>> active_file_name("app", "log", date(2024, 1, 1))
'app.2024-01-01.log'
>>> sorted(retention_set("app", "log", date(2024, 1, 3), 2))
['app.2024-01-02.log', 'app.2024-01-03.log']
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

_DATE_TOKEN = r"\d{4}-\d{2}-\d{2}"


def utc_today() -> date:
    """Current calendar day in UTC, the default clock for writers and sweepers."""
    return datetime.now(tz=timezone.utc).date()


def _calendar_day(day: date | datetime) -> date:
    # datetime is a subclass of date, so check it first.
    if isinstance(day, datetime):
        return day.date()
    return day


def active_file_name(base_name: str, extension: str, day: date | datetime) -> str:
    """Return the dated file name for ``day``.

    Any time-of-day component is dropped, so every write made on the same
    calendar day resolves to the same name.
    """
    return f"{base_name}.{_calendar_day(day).isoformat()}.{extension}"


def alias_file_name(base_name: str, extension: str) -> str:
    """Return the undated alias name, e.g. ``app.log``."""
    return f"{base_name}.{extension}"


def retention_set(
    base_name: str,
    extension: str,
    today: date | datetime,
    retention_count: int,
) -> frozenset[str]:
    """Return the file names that must survive a sweep.

    Parameters
    ----------
    base_name, extension:
        Components of the naming template.
    today:
        Reference day.  It is always part of the set.
    retention_count:
        Number of calendar days to keep, counting backward from ``today``
        inclusive.  Must be at least 1.

    Raises
    ------
    ValueError:
        When ``retention_count`` is smaller than 1.
    """
    if retention_count < 1:
        raise ValueError(f"retention_count must be >= 1, got {retention_count}")
    day = _calendar_day(today)
    return frozenset(
        active_file_name(base_name, extension, day - timedelta(days=offset))
        for offset in range(retention_count)
    )


def candidate_pattern(base_name: str, extension: str) -> re.Pattern[str]:
    """Compile the structural pattern that identifies dated log files.

    The match is anchored at both ends so that files merely sharing a
    prefix (``app-old.2024-01-01.log``, ``app.2024-01-01.log.bak``) are
    never treated as candidates.
    """
    return re.compile(
        rf"^{re.escape(base_name)}\.{_DATE_TOKEN}\.{re.escape(extension)}$"
    )


def split_filename(filename: str) -> tuple[str, str]:
    """Split a template such as ``app.log`` into ``("app", "log")``.

    Only the last suffix counts as the extension, so ``app.access.log``
    becomes ``("app.access", "log")``.

    Raises
    ------
    ValueError:
        When the name has no extension.
    """
    base_name, sep, extension = filename.rpartition(".")
    if not sep or not base_name or not extension:
        raise ValueError(f"Log file name '{filename}' must look like '<base>.<ext>'")
    return base_name, extension
