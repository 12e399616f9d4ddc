"""
Data models for the working time act checker using Pydantic.
"""

from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# A period boundary may carry a time of day; only its date is used for the calendar.
Instant = Union[datetime, date]


class SortOrder(str, Enum):
    """Sort direction for report rows."""

    ASC = "ASC"
    DESC = "DESC"


class TimeEntry(BaseModel):
    """A single recorded time entry (timesheet record)."""

    model_config = ConfigDict(frozen=True)

    start: Optional[datetime] = Field(default=None, description="Start timestamp of the entry")
    entry_date: Optional[date] = Field(
        default=None, description="Calendar date, used when no start timestamp is recorded"
    )
    duration_seconds: float = Field(default=0, ge=0, description="Worked duration in seconds")
    user: Optional[str] = Field(default=None, description="Name of the worker who recorded it")


class Worker(BaseModel):
    """A worker whose entries are checked."""

    name: str = Field(..., min_length=1, description="Display name of the worker")
    holiday_group: Optional[str] = Field(
        default=None, description="Opaque identifier of the worker's public holiday calendar"
    )


class Holiday(BaseModel):
    """Represents a public holiday."""

    holiday_date: date = Field(..., description="Date of the holiday")
    name: str = Field(..., description="Name of the holiday")


class ComplianceResult(BaseModel):
    """Outcome of a single compliance evaluation."""

    compliance: bool = Field(..., description="Whether the average stays within the daily limit")
    average: float = Field(..., ge=0.0, description="Average worked hours per working day")
    total_hours: float = Field(..., ge=0.0, description="Hours worked on working days")
    workdays: int = Field(..., ge=0, description="Number of working days in the period")
    period_start: Instant = Field(..., description="Start of the evaluated period")
    period_end: Instant = Field(..., description="End of the evaluated period")


class ComplianceQuery(BaseModel):
    """Selection, search, sort and paging options for a compliance report."""

    users: List[str] = Field(default_factory=list, description="Worker names; empty selects all")
    begin: Optional[date] = Field(default=None, description="Start of a custom date range")
    end: Optional[date] = Field(default=None, description="End of a custom date range")
    search_term: Optional[str] = Field(default=None, description="Free text filter on the rows")
    order_by: str = Field(default="user", description="Column to sort by")
    order: SortOrder = Field(default=SortOrder.ASC, description="Sort direction")
    page: int = Field(default=1, ge=1, description="Page number, starting at 1")
    page_size: int = Field(default=50, ge=1, le=1000, description="Rows per page")

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, v):
        """Accept the sort direction in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @property
    def has_custom_date_range(self) -> bool:
        """True if both ends of the custom date range are set."""
        return self.begin is not None and self.end is not None


class ReportRow(BaseModel):
    """One worker's line in a compliance report."""

    user: str
    average_daterange: Optional[float] = None
    average_6months: Optional[float] = None
    average_24weeks: Optional[float] = None
    compliance: Optional[bool] = None


class ReportPage(BaseModel):
    """A page of report rows."""

    rows: List[ReportRow] = Field(default_factory=list)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total: int = Field(..., ge=0, description="Number of rows across all pages")
    pages: int = Field(..., ge=0, description="Number of pages")
    custom_date_range: bool = Field(default=False, description="Rows carry average_daterange")


class Config(BaseModel):
    """Configuration for the working time act checker."""

    holiday_country: str = Field(default="DE", description="Country code for the holidays library")
    holiday_language: str = Field(default="de", description="Language for holiday names")
    holiday_groups: Dict[str, str] = Field(
        default_factory=dict, description="Holiday group identifier to subdivision code"
    )
    default_holiday_group: Optional[str] = Field(
        default=None, description="Holiday group for workers that have none"
    )
    max_daily_hours: float = Field(default=8.0, gt=0, le=24, description="Average daily hour limit")
    non_working_weekday: int = Field(
        default=6, ge=0, le=6, description="Excluded weekday (Monday=0 ... Sunday=6)"
    )
    output_format: str = Field(default="console", description="Default output format")
    output_directory: str = Field(default="results", description="Directory for output files")
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server port")
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the log level is one logging understands."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level
