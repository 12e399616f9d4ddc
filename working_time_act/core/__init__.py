"""
Core business logic for the working time act check.
"""

from working_time_act.core.aggregator import SECONDS_PER_HOUR, aggregate_daily_hours
from working_time_act.core.calendar import InvalidPeriodError, build_calendar
from working_time_act.core.evaluator import MAX_DAILY_HOURS, ComplianceEvaluator, check_compliance
from working_time_act.core.holiday_provider import HolidayLookup, HolidayProvider
from working_time_act.core.report import ComplianceReporter, TimeEntrySource
from working_time_act.core.working_days import SUNDAY, WorkingDayFilter

__all__ = [
    "MAX_DAILY_HOURS",
    "SECONDS_PER_HOUR",
    "SUNDAY",
    "ComplianceEvaluator",
    "ComplianceReporter",
    "HolidayLookup",
    "HolidayProvider",
    "InvalidPeriodError",
    "TimeEntrySource",
    "WorkingDayFilter",
    "aggregate_daily_hours",
    "build_calendar",
    "check_compliance",
]
