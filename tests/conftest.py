"""
Shared fixtures for the working time act tests.
"""

from datetime import date, datetime

import pytest

from working_time_act.data.schemas import TimeEntry


class StubHolidayLookup:
    """Holiday lookup returning fixed dates and recording its calls."""

    def __init__(self, holidays=None, error=None):
        self.holidays = list(holidays or [])
        self.error = error
        self.calls = []

    def find_holidays(self, start, end, group_id):
        self.calls.append((start, end, group_id))
        if self.error is not None:
            raise self.error
        return self.holidays


@pytest.fixture
def make_entry():
    """Factory for a time entry starting at 09:00 on a given ISO date."""

    def _make_entry(day: str, duration_seconds: float, user: str = None) -> TimeEntry:
        return TimeEntry(
            start=datetime.fromisoformat(f"{day}T09:00:00"),
            duration_seconds=duration_seconds,
            user=user,
        )

    return _make_entry


@pytest.fixture
def holiday_lookup():
    """Factory for a stub holiday lookup."""

    def _holiday_lookup(*days: str, error: Exception = None) -> StubHolidayLookup:
        return StubHolidayLookup([date.fromisoformat(d) for d in days], error=error)

    return _holiday_lookup
