"""
Tests for the working-day filter.
"""

import logging
from datetime import date, datetime

import pytest

from working_time_act.core.calendar import build_calendar
from working_time_act.core.working_days import SUNDAY, WorkingDayFilter
from working_time_act.data.schemas import Holiday

# Monday 2026-01-05 to Sunday 2026-01-18
TWO_WEEKS = build_calendar(date(2026, 1, 5), date(2026, 1, 18))


class TestWeekdayExclusion:
    """Exclusion of the non-working weekday."""

    def test_sundays_removed(self):
        """Without holidays only the two Sundays drop out."""
        working_days = WorkingDayFilter().filter(TWO_WEEKS, None, TWO_WEEKS[0], TWO_WEEKS[-1])

        assert len(working_days) == 12
        assert date(2026, 1, 11) not in working_days
        assert date(2026, 1, 18) not in working_days
        assert date(2026, 1, 10) in working_days  # Saturday

    def test_sunday_constant(self):
        """Sunday uses Python's weekday numbering."""
        assert SUNDAY == 6
        assert date(2026, 1, 11).weekday() == SUNDAY

    def test_other_weekday(self):
        """The excluded weekday can be changed."""
        working_days = WorkingDayFilter(non_working_weekday=5).filter(
            TWO_WEEKS, None, TWO_WEEKS[0], TWO_WEEKS[-1]
        )

        assert date(2026, 1, 10) not in working_days
        assert date(2026, 1, 11) in working_days

    @pytest.mark.parametrize("weekday", [-1, 7])
    def test_invalid_weekday(self, weekday):
        """Weekdays outside 0..6 are rejected."""
        with pytest.raises(ValueError):
            WorkingDayFilter(non_working_weekday=weekday)


class TestHolidayExclusion:
    """Exclusion of public holidays."""

    def test_holidays_removed(self, holiday_lookup):
        """Holiday dates from the lookup are not working days."""
        lookup = holiday_lookup("2026-01-06", "2026-01-13")

        working_days = WorkingDayFilter(lookup).filter(
            TWO_WEEKS, "HH", TWO_WEEKS[0], TWO_WEEKS[-1]
        )

        assert len(working_days) == 10
        assert date(2026, 1, 6) not in working_days
        assert date(2026, 1, 13) not in working_days

    def test_lookup_receives_dates_and_group(self, holiday_lookup):
        """The lookup is asked for the period's calendar dates and the group."""
        lookup = holiday_lookup()

        WorkingDayFilter(lookup).filter(
            TWO_WEEKS, "2", datetime(2026, 1, 5, 8, 0), datetime(2026, 1, 18, 20, 0)
        )

        assert lookup.calls == [(date(2026, 1, 5), date(2026, 1, 18), "2")]

    def test_holiday_records_and_datetimes_accepted(self):
        """Lookups may return Holiday records or datetimes."""

        class RecordLookup:
            def find_holidays(self, start, end, group_id):
                return [
                    Holiday(holiday_date=date(2026, 1, 6), name="Heilige Drei Könige"),
                    datetime(2026, 1, 13, 0, 0),
                ]

        working_days = WorkingDayFilter(RecordLookup()).filter(
            TWO_WEEKS, "BY", TWO_WEEKS[0], TWO_WEEKS[-1]
        )

        assert date(2026, 1, 6) not in working_days
        assert date(2026, 1, 13) not in working_days

    def test_holidays_outside_period_ignored(self, holiday_lookup):
        """Holidays that are not calendar days of the period change nothing."""
        lookup = holiday_lookup("2025-12-25", "2026-02-01")

        working_days = WorkingDayFilter(lookup).filter(
            TWO_WEEKS, "HH", TWO_WEEKS[0], TWO_WEEKS[-1]
        )

        assert len(working_days) == 12

    def test_holiday_on_sunday(self, holiday_lookup):
        """A holiday on the excluded weekday is removed only once."""
        lookup = holiday_lookup("2026-01-11")

        working_days = WorkingDayFilter(lookup).filter(
            TWO_WEEKS, "HH", TWO_WEEKS[0], TWO_WEEKS[-1]
        )

        assert len(working_days) == 12


class TestMissingHolidayData:
    """Behaviour when holiday data is unavailable."""

    @pytest.mark.parametrize("group", [None, ""])
    def test_no_group_skips_lookup(self, holiday_lookup, group):
        """Without a holiday group the lookup is never called."""
        lookup = holiday_lookup("2026-01-06")

        working_days = WorkingDayFilter(lookup).filter(
            TWO_WEEKS, group, TWO_WEEKS[0], TWO_WEEKS[-1]
        )

        assert lookup.calls == []
        assert len(working_days) == 12

    def test_no_lookup(self):
        """Without a lookup a holiday group has no effect."""
        working_days = WorkingDayFilter(None).filter(
            TWO_WEEKS, "HH", TWO_WEEKS[0], TWO_WEEKS[-1]
        )

        assert len(working_days) == 12

    def test_failing_lookup_is_logged(self, holiday_lookup, caplog):
        """A failing lookup counts as no holidays and logs a warning."""
        lookup = holiday_lookup(error=RuntimeError("connection refused"))

        with caplog.at_level(logging.WARNING, logger="working_time_act.core.working_days"):
            working_days = WorkingDayFilter(lookup).filter(
                TWO_WEEKS, "HH", TWO_WEEKS[0], TWO_WEEKS[-1]
            )

        assert len(working_days) == 12
        assert "connection refused" in caplog.text
