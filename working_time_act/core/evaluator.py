"""
Compliance evaluation for the German Working Time Act (Arbeitszeitgesetz).

§ 3 ArbZG: "Die werktägliche Arbeitszeit der Arbeitnehmer darf acht Stunden
nicht überschreiten. Sie kann auf bis zu zehn Stunden nur verlängert werden,
wenn innerhalb von sechs Kalendermonaten oder innerhalb von 24 Wochen im
Durchschnitt acht Stunden werktäglich nicht überschritten werden."

Daily working time may be extended to ten hours only if the average over six
calendar months or 24 weeks stays at or below eight hours per working day.
"""

import logging
from typing import Iterable, Optional

from working_time_act.core.aggregator import aggregate_daily_hours
from working_time_act.core.calendar import build_calendar, validate_period
from working_time_act.core.holiday_provider import HolidayLookup
from working_time_act.core.working_days import SUNDAY, WorkingDayFilter
from working_time_act.data.schemas import ComplianceResult, Config, Instant, TimeEntry

logger = logging.getLogger(__name__)

MAX_DAILY_HOURS = 8.0


class ComplianceEvaluator:
    """Checks time entries against the average daily hour limit."""

    def __init__(
        self,
        holiday_lookup: Optional[HolidayLookup] = None,
        max_daily_hours: float = MAX_DAILY_HOURS,
        non_working_weekday: int = SUNDAY,
    ):
        """
        Initialize the evaluator.

        Args:
            holiday_lookup: Source of public holidays, optional.
            max_daily_hours: Highest compliant average per working day.
            non_working_weekday: Weekday excluded from working days (Monday=0).
        """
        self.max_daily_hours = max_daily_hours
        self.working_day_filter = WorkingDayFilter(holiday_lookup, non_working_weekday)

    @classmethod
    def from_config(
        cls, config: Config, holiday_lookup: Optional[HolidayLookup] = None
    ) -> "ComplianceEvaluator":
        """Create an evaluator using the rule settings of a Config."""
        return cls(
            holiday_lookup=holiday_lookup,
            max_daily_hours=config.max_daily_hours,
            non_working_weekday=config.non_working_weekday,
        )

    def evaluate(
        self,
        entries: Iterable[TimeEntry],
        holiday_group,
        period_start: Instant,
        period_end: Instant,
    ) -> ComplianceResult:
        """
        Evaluate time entries for one period.

        Args:
            entries: Time entries of a single worker.
            holiday_group: Holiday group identifier of the worker, or None.
            period_start: First day of the period (inclusive).
            period_end: Last day of the period (inclusive).

        Returns:
            ComplianceResult with totals, average and verdict.

        Raises:
            InvalidPeriodError: If period_start is after period_end.
        """
        validate_period(period_start, period_end)

        calendar_days = build_calendar(period_start, period_end)
        working_days = self.working_day_filter.filter(
            calendar_days, holiday_group, period_start, period_end
        )
        daily_hours = aggregate_daily_hours(entries)

        # Ascending order keeps the float sum reproducible
        total_hours = 0.0
        for day in sorted(working_days):
            total_hours += daily_hours.get(day, 0.0)

        workday_count = len(working_days)
        average = total_hours / workday_count if workday_count > 0 else 0.0

        logger.debug(
            f"Evaluated {len(calendar_days)} days: {workday_count} working days, "
            f"{total_hours:.2f} hours, average {average:.2f}"
        )

        return ComplianceResult(
            compliance=average <= self.max_daily_hours,
            average=average,
            total_hours=total_hours,
            workdays=workday_count,
            period_start=period_start,
            period_end=period_end,
        )


def check_compliance(
    entries: Iterable[TimeEntry],
    holiday_group,
    period_start: Instant,
    period_end: Instant,
    holiday_lookup: Optional[HolidayLookup] = None,
) -> ComplianceResult:
    """Evaluate entries with the statutory defaults."""
    evaluator = ComplianceEvaluator(holiday_lookup)
    return evaluator.evaluate(entries, holiday_group, period_start, period_end)
