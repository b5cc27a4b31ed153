"""Shared fixtures for rolling-file-sink tests."""
from __future__ import annotations

from datetime import date, timedelta

import pytest


class FakeClock:
    """Controllable day source for writers and sweepers."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int = 1) -> None:
        self.today = self.today + timedelta(days=days)

    def set(self, today: date) -> None:
        self.today = today


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(date(2024, 1, 1))
