"""
Compliance report over several workers.

Selects the workers and periods to evaluate, runs the evaluator per worker and
filters, sorts and paginates the resulting rows.
"""

import calendar
import logging
import math
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from working_time_act.core.aggregator import resolve_entry_date
from working_time_act.core.evaluator import ComplianceEvaluator
from working_time_act.data.schemas import (
    ComplianceQuery,
    ReportPage,
    ReportRow,
    SortOrder,
    TimeEntry,
    Worker,
)

logger = logging.getLogger(__name__)

ORDER_ALLOWED = ["user", "average_daterange", "average_6months", "average_24weeks"]

DEFAULT_MONTHS = 6
DEFAULT_WEEKS = 24


class TimeEntrySource(Protocol):
    """Anything able to supply a worker's time entries for a period."""

    def find_entries(self, user: str, start: date, end: date) -> List[TimeEntry]:
        ...


def subtract_months(day: date, months: int) -> date:
    """Go back a number of calendar months, clamping to the last day of the month."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def entries_since(entries: Sequence[TimeEntry], min_date: date) -> List[TimeEntry]:
    """Keep the entries dated on or after min_date."""
    result = []
    for entry in entries:
        day = resolve_entry_date(entry)
        if day is not None and day >= min_date:
            result.append(entry)
    return result


def _format_average(value: Optional[float]) -> str:
    return "" if value is None else str(value)


def row_matches_search_term(row: ReportRow, term: str) -> bool:
    """Check whether a lower-cased term occurs in one of the searchable fields."""
    searchable_fields = [
        row.user.lower(),
        _format_average(row.average_daterange),
        _format_average(row.average_6months),
        _format_average(row.average_24weeks),
    ]
    return any(term in field for field in searchable_fields)


def filter_by_search_term(rows: List[ReportRow], search_term: Optional[str]) -> List[ReportRow]:
    """Keep rows matching every whitespace-separated part of the search term."""
    if not search_term or not search_term.strip():
        return rows

    parts = [part.lower() for part in search_term.split()]
    return [row for row in rows if all(row_matches_search_term(row, part) for part in parts)]


def sort_rows(rows: List[ReportRow], order_by: Optional[str], order: SortOrder) -> List[ReportRow]:
    """
    Sort rows by an allowed column.

    Strings compare case-insensitively and missing values sort lowest. Columns
    outside ORDER_ALLOWED leave the order untouched.
    """
    if not order_by or order_by not in ORDER_ALLOWED:
        return rows

    def sort_key(row: ReportRow):
        value = getattr(row, order_by)
        if value is None:
            return (0, 0)
        if isinstance(value, str):
            return (1, value.lower())
        return (1, value)

    return sorted(rows, key=sort_key, reverse=order == SortOrder.DESC)


def paginate(rows: List[ReportRow], page: int, page_size: int, custom_date_range: bool) -> ReportPage:
    """Cut one page out of the rows."""
    total = len(rows)
    pages = math.ceil(total / page_size) if total else 0
    offset = (page - 1) * page_size
    return ReportPage(
        rows=rows[offset:offset + page_size],
        page=page,
        page_size=page_size,
        total=total,
        pages=pages,
        custom_date_range=custom_date_range,
    )


class ComplianceReporter:
    """Builds compliance reports for a set of workers."""

    def __init__(
        self,
        evaluator: ComplianceEvaluator,
        entry_source: TimeEntrySource,
        workers: Sequence[Worker],
        default_holiday_group: Optional[str] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize the reporter.

        Args:
            evaluator: Evaluator used for every worker and period.
            entry_source: Source of the workers' time entries.
            workers: All known workers.
            default_holiday_group: Holiday group for workers without one.
            today: Returns the end date of the default periods. Defaults to date.today.
        """
        self.evaluator = evaluator
        self.entry_source = entry_source
        self.workers = list(workers)
        self.default_holiday_group = default_holiday_group
        self.today = today or date.today

    def select_workers(self, query: ComplianceQuery) -> List[Worker]:
        """Return the queried workers, or all of them when none are selected."""
        if not query.users:
            return list(self.workers)

        by_name: Dict[str, Worker] = {w.name: w for w in self.workers}
        selected = []
        for name in query.users:
            worker = by_name.get(name)
            if worker is None:
                raise ValueError(f"Unknown worker: {name}")
            selected.append(worker)
        return selected

    def holiday_group_for(self, worker: Worker) -> Optional[str]:
        """Holiday group of a worker, falling back to the default group."""
        return worker.holiday_group or self.default_holiday_group

    def evaluate_date_range(self, worker: Worker, begin: date, end: date) -> ReportRow:
        """Evaluate a worker over a custom date range."""
        entries = self.entry_source.find_entries(worker.name, begin, end)
        result = self.evaluator.evaluate(entries, self.holiday_group_for(worker), begin, end)
        return ReportRow(user=worker.name, average_daterange=round(result.average, 2))

    def evaluate_default_periods(self, worker: Worker) -> ReportRow:
        """Evaluate a worker over the last six calendar months and the last 24 weeks."""
        period_end = self.today()
        start_months = subtract_months(period_end, DEFAULT_MONTHS)
        start_weeks = period_end - timedelta(weeks=DEFAULT_WEEKS)
        holiday_group = self.holiday_group_for(worker)

        # Six months always cover 24 weeks, so entries are fetched once
        entries_months = self.entry_source.find_entries(worker.name, start_months, period_end)
        result_months = self.evaluator.evaluate(
            entries_months, holiday_group, start_months, period_end
        )

        entries_weeks = entries_since(entries_months, start_weeks)
        result_weeks = self.evaluator.evaluate(
            entries_weeks, holiday_group, start_weeks, period_end
        )

        return ReportRow(
            user=worker.name,
            average_6months=round(result_months.average, 2),
            average_24weeks=round(result_weeks.average, 2),
            compliance=result_months.compliance and result_weeks.compliance,
        )

    def build_rows(self, query: ComplianceQuery) -> List[ReportRow]:
        """Evaluate every selected worker."""
        rows = []
        for worker in self.select_workers(query):
            if query.has_custom_date_range:
                rows.append(self.evaluate_date_range(worker, query.begin, query.end))
            else:
                rows.append(self.evaluate_default_periods(worker))
        return rows

    def build_report(self, query: ComplianceQuery) -> ReportPage:
        """
        Build one page of the compliance report.

        Args:
            query: Selection, search, sort and paging options.

        Returns:
            ReportPage with the requested rows.

        Raises:
            InvalidPeriodError: If the custom date range starts after it ends.
            ValueError: If a selected worker is unknown.
        """
        rows = self.build_rows(query)
        rows = filter_by_search_term(rows, query.search_term)
        rows = sort_rows(rows, query.order_by, query.order)

        logger.info(f"Compliance report built for {len(rows)} workers")
        return paginate(rows, query.page, query.page_size, query.has_custom_date_range)
