"""
Data models and loaders for the working time act checker.
"""

from working_time_act.data.schemas import (
    ComplianceQuery,
    ComplianceResult,
    Config,
    Holiday,
    ReportPage,
    ReportRow,
    SortOrder,
    TimeEntry,
    Worker,
)

__all__ = [
    "ComplianceQuery",
    "ComplianceResult",
    "Config",
    "Holiday",
    "ReportPage",
    "ReportRow",
    "SortOrder",
    "TimeEntry",
    "Worker",
]
