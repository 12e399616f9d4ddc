"""
Calendar building for compliance periods.
"""

from datetime import date, datetime, timedelta
from typing import List, Tuple

from working_time_act.data.schemas import Instant


class InvalidPeriodError(ValueError):
    """Raised when a period starts after it ends."""


def to_calendar_date(value: Instant) -> date:
    """
    Reduce a period boundary to its calendar date.

    The time of day and any timezone offset are dropped; the date is the one
    shown on the boundary's own wall clock.

    Args:
        value: Date or datetime.

    Returns:
        The calendar date of the value.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def _both_aware(start: Instant, end: Instant) -> bool:
    return (
        isinstance(start, datetime)
        and isinstance(end, datetime)
        and start.tzinfo is not None
        and end.tzinfo is not None
    )


def period_dates(start: Instant, end: Instant) -> Tuple[date, date]:
    """
    Calendar dates of both period boundaries, read in one timezone.

    When both boundaries are timezone-aware the end is moved into the start's
    timezone first, so date order always follows instant order.
    """
    if _both_aware(start, end):
        end = end.astimezone(start.tzinfo)
    return to_calendar_date(start), to_calendar_date(end)


def validate_period(start: Instant, end: Instant) -> None:
    """
    Ensure a period does not start after it ends.

    Two datetimes of the same kind (both naive or both aware) are compared as
    instants; anything else is compared by calendar date.

    Raises:
        InvalidPeriodError: If start is after end.
    """
    if (
        isinstance(start, datetime)
        and isinstance(end, datetime)
        and (start.tzinfo is None) == (end.tzinfo is None)
    ):
        invalid = start > end
    else:
        first, last = period_dates(start, end)
        invalid = first > last

    if invalid:
        raise InvalidPeriodError("Period start must be before period end")


def build_calendar(start: Instant, end: Instant) -> List[date]:
    """
    List every calendar day of an inclusive period in ascending order.

    Args:
        start: First day of the period.
        end: Last day of the period.

    Returns:
        One date per day; empty if end lies before start.
    """
    current, last = period_dates(start, end)

    days = []
    while current <= last:
        days.append(current)
        current += timedelta(days=1)
    return days
