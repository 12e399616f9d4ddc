"""
Daily aggregation of time entries.
"""

import logging
from datetime import date, datetime
from typing import Dict, Iterable, Iterator, Optional

from working_time_act.data.schemas import TimeEntry

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


def resolve_entry_date(entry: TimeEntry) -> Optional[date]:
    """
    Resolve the calendar date an entry belongs to.

    The start timestamp wins; the plain entry date is the fallback.

    Returns:
        The date, or None if the entry carries neither.
    """
    value = getattr(entry, "start", None) or getattr(entry, "entry_date", None)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


def has_resolvable_date(entry: TimeEntry) -> bool:
    """Entries failing date resolution are excluded from aggregation."""
    return resolve_entry_date(entry) is not None


def seconds_to_hours(seconds: float) -> float:
    """Convert a duration in seconds to hours, without rounding."""
    return seconds / SECONDS_PER_HOUR


def dated_entries(entries: Iterable[TimeEntry]) -> Iterator[TimeEntry]:
    """Yield the entries that pass has_resolvable_date."""
    for entry in entries:
        if has_resolvable_date(entry):
            yield entry
        else:
            logger.debug(f"Skipping time entry without a resolvable date: {entry!r}")


def aggregate_daily_hours(entries: Iterable[TimeEntry]) -> Dict[date, float]:
    """
    Sum worked hours per calendar date.

    Every dated entry is aggregated, whether or not its date is a working day
    or lies inside the evaluated period.

    Args:
        entries: Time entries.

    Returns:
        Mapping of date to hours; dates without entries are absent.
    """
    daily_hours: Dict[date, float] = {}

    for entry in dated_entries(entries):
        day = resolve_entry_date(entry)
        hours = seconds_to_hours(getattr(entry, "duration_seconds", None) or 0)
        daily_hours[day] = daily_hours.get(day, 0) + hours

    return daily_hours
