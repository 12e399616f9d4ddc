"""
FastAPI REST API for the working time act checker.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from working_time_act import __version__
from working_time_act.config.manager import ConfigManager
from working_time_act.core.calendar import InvalidPeriodError
from working_time_act.core.evaluator import ComplianceEvaluator
from working_time_act.core.holiday_provider import HolidayProvider
from working_time_act.core.report import ComplianceReporter
from working_time_act.data.loader import InMemoryTimeEntrySource, workers_from_entries
from working_time_act.data.schemas import (
    ComplianceQuery,
    ComplianceResult,
    Holiday,
    ReportPage,
    SortOrder,
    TimeEntry,
    Worker,
)

logger = logging.getLogger(__name__)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
holiday_provider = HolidayProvider.from_config(config)
evaluator = ComplianceEvaluator.from_config(config, holiday_provider)


# API Models
class CheckRequest(BaseModel):
    """Request model for a single compliance check."""

    start_date: date = Field(..., description="Start date of the period")
    end_date: date = Field(..., description="End date of the period")
    holiday_group: Optional[str] = Field(None, description="Holiday group identifier")
    entries: List[TimeEntry] = Field(default_factory=list, description="Time entries of the worker")


class ReportRequest(BaseModel):
    """Request model for a multi-worker compliance report."""

    entries: List[TimeEntry] = Field(default_factory=list, description="Time entries of all workers")
    workers: List[Worker] = Field(
        default_factory=list, description="Workers; derived from the entries if empty"
    )
    users: List[str] = Field(default_factory=list, description="Workers to include")
    begin: Optional[date] = Field(None, description="Start of a custom date range")
    end: Optional[date] = Field(None, description="End of a custom date range")
    search_term: Optional[str] = Field(None, description="Free text filter")
    order_by: str = Field("user", description="Column to sort by")
    order: SortOrder = Field(SortOrder.ASC, description="Sort direction")
    page: int = Field(1, ge=1, description="Page number")
    page_size: int = Field(50, ge=1, le=1000, description="Rows per page")


# FastAPI app
app = FastAPI(
    title="Working Time Act API",
    description="Check average daily working time against § 3 ArbZG",
    version=__version__,
)


@app.get("/")
async def root():
    """API root endpoint with basic info."""
    return {
        "name": "Working Time Act API",
        "version": __version__,
        "endpoints": {
            "POST /check": "Check one worker's time entries for a period",
            "POST /report": "Compliance report for several workers",
            "GET /holidays/{year}/{group}": "Get holidays of a holiday group",
        },
    }


@app.post("/check", response_model=ComplianceResult)
async def check(request: CheckRequest):
    """
    Check time entries against the average daily hour limit.

    Returns working days, total hours, the average per working day and the
    compliance verdict.
    """
    group = request.holiday_group or config.default_holiday_group
    try:
        return evaluator.evaluate(request.entries, group, request.start_date, request.end_date)
    except InvalidPeriodError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/report", response_model=ReportPage)
async def report(request: ReportRequest):
    """
    Build a compliance report for several workers.

    Without begin and end every worker is checked over the last six months
    and the last 24 weeks.
    """
    if (request.begin is None) != (request.end is None):
        raise HTTPException(status_code=400, detail="Provide both begin and end for a custom date range")

    workers = request.workers or workers_from_entries(request.entries)
    reporter = ComplianceReporter(
        evaluator,
        InMemoryTimeEntrySource(request.entries),
        workers,
        default_holiday_group=config.default_holiday_group,
    )
    query = ComplianceQuery(
        users=request.users,
        begin=request.begin,
        end=request.end,
        search_term=request.search_term,
        order_by=request.order_by,
        order=request.order,
        page=request.page,
        page_size=request.page_size,
    )

    try:
        return reporter.build_report(query)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/holidays/{year}/{group}", response_model=List[Holiday])
async def get_holidays(year: int, group: str):
    """
    Get all holidays for a specific year and holiday group.

    Args:
        year: Year (e.g., 2025, 2026)
        group: Holiday group identifier or subdivision code (e.g., HH, BY)
    """
    if year < 1900 or year > 2100:
        raise HTTPException(
            status_code=400,
            detail="Year must be between 1900 and 2100",
        )

    try:
        holidays = holiday_provider.get_holidays_for_year(year, group)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return holidays


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
