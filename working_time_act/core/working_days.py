"""
Working-day filtering: drops the non-working weekday and public holidays.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Set

from working_time_act.core.calendar import period_dates
from working_time_act.core.holiday_provider import HolidayLookup
from working_time_act.data.schemas import Instant

logger = logging.getLogger(__name__)

# Python weekday numbering (Monday=0)
SUNDAY = 6


def _holiday_to_date(item) -> date:
    """Normalize a holiday item (date, datetime or Holiday record) to a date."""
    if isinstance(item, datetime):
        return item.date()
    if isinstance(item, date):
        return item
    return _holiday_to_date(item.holiday_date)


class WorkingDayFilter:
    """Reduces a list of calendar days to the set of working days."""

    def __init__(
        self,
        holiday_lookup: Optional[HolidayLookup] = None,
        non_working_weekday: int = SUNDAY,
    ):
        """
        Initialize the filter.

        Args:
            holiday_lookup: Source of public holidays. None disables holiday exclusion.
            non_working_weekday: The single weekday that never counts (Monday=0).
        """
        if not 0 <= non_working_weekday <= 6:
            raise ValueError(f"Weekday must be between 0 and 6, got {non_working_weekday}")
        self.holiday_lookup = holiday_lookup
        self.non_working_weekday = non_working_weekday

    def fetch_holidays(self, period_start: Instant, period_end: Instant, holiday_group) -> Set[date]:
        """
        Fetch holiday dates for the period, best effort.

        Without a holiday group or a lookup the result is empty. A failing
        lookup is logged and also yields an empty set; holiday data never
        aborts a compliance check.
        """
        if not holiday_group or self.holiday_lookup is None:
            return set()

        first_day, last_day = period_dates(period_start, period_end)
        try:
            found = self.holiday_lookup.find_holidays(first_day, last_day, holiday_group)
            return {_holiday_to_date(item) for item in found}
        except Exception as e:
            logger.warning(
                f"Holiday lookup failed for group {holiday_group!r}, continuing without holidays: {e}"
            )
            return set()

    def is_working_day(self, day: date, holidays: Set[date]) -> bool:
        """Check whether a day is neither the non-working weekday nor a holiday."""
        if day.weekday() == self.non_working_weekday:
            return False
        return day not in holidays

    def filter(
        self,
        calendar_days: Iterable[date],
        holiday_group,
        period_start: Instant,
        period_end: Instant,
    ) -> Set[date]:
        """
        Select the working days among the calendar days of a period.

        Args:
            calendar_days: Every day of the period.
            holiday_group: Holiday group identifier, or None.
            period_start: Start of the period (passed to the holiday lookup).
            period_end: End of the period (passed to the holiday lookup).

        Returns:
            Set of working days.
        """
        holidays = self.fetch_holidays(period_start, period_end, holiday_group)
        return {day for day in calendar_days if self.is_working_day(day, holidays)}
