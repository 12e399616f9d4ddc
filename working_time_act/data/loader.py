"""
Loading of time entries and workers from files.
"""

import csv
import json
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from working_time_act.core.aggregator import resolve_entry_date
from working_time_act.data.schemas import TimeEntry, Worker

logger = logging.getLogger(__name__)


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO timestamp; unparseable values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        logger.debug(f"Unparseable timestamp ignored: {value!r}")
        return None


def _parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date; unparseable values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        logger.debug(f"Unparseable date ignored: {value!r}")
        return None


def _parse_duration(value: Any, row_number: int) -> float:
    """Parse a duration in seconds."""
    if value is None or value == "":
        return 0.0
    try:
        duration = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Row {row_number}: duration must be a number, got {value!r}")
    if duration < 0:
        raise ValueError(f"Row {row_number}: duration must not be negative, got {value!r}")
    return duration


class TimeEntryLoader:
    """Loads time entries from CSV or JSON files."""

    def load(self, path: str) -> List[TimeEntry]:
        """
        Load time entries from a file.

        CSV files need a header with the columns user, begin, date and
        duration (seconds). JSON files hold a list of objects with the same
        keys, optionally wrapped as {"entries": [...]}.

        Args:
            path: Path to a .csv or .json file.

        Returns:
            List of TimeEntry objects in file order.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file type or a duration is invalid.
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Time entry file not found: {path}")

        suffix = file_path.suffix.lower()
        if suffix == ".csv":
            records = self._read_csv(file_path)
        elif suffix == ".json":
            records = self._read_json(file_path)
        else:
            raise ValueError(f"Unsupported time entry file type: {suffix or path}")

        entries = self.parse_records(records)
        logger.info(f"Loaded {len(entries)} time entries from {file_path}")
        return entries

    def parse_records(self, records: Iterable[Dict[str, Any]]) -> List[TimeEntry]:
        """
        Convert raw records into TimeEntry objects.

        Args:
            records: Dictionaries with user, begin, date and duration keys.

        Returns:
            List of TimeEntry objects.

        Raises:
            ValueError: If a record is not a mapping or its duration is invalid.
        """
        entries = []
        for row_number, record in enumerate(records, start=1):
            if not isinstance(record, dict):
                raise ValueError(f"Row {row_number}: expected a mapping, got {record!r}")
            user = record.get("user")
            entries.append(
                TimeEntry(
                    start=_parse_datetime(record.get("begin")),
                    entry_date=_parse_date(record.get("date")),
                    duration_seconds=_parse_duration(record.get("duration"), row_number),
                    user=str(user).strip() if user not in (None, "") else None,
                )
            )
        return entries

    def _read_csv(self, file_path: Path) -> List[Dict[str, Any]]:
        with open(file_path, "r", newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))

    def _read_json(self, file_path: Path) -> List[Dict[str, Any]]:
        with open(file_path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Error parsing JSON time entry file: {e}")

        if isinstance(data, dict):
            data = data.get("entries", [])
        if not isinstance(data, list):
            raise ValueError("Time entry JSON must be a list or an object with 'entries'")
        return data


def load_workers(path: str) -> List[Worker]:
    """
    Load workers from a YAML or JSON file.

    The file holds a list of {name, holiday_group} objects, optionally wrapped
    as {"workers": [...]}.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the content is not a worker list.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Worker file not found: {path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing worker file: {e}")

    if isinstance(data, dict):
        data = data.get("workers", [])
    if not isinstance(data, list):
        raise ValueError("Worker file must contain a list of workers")

    workers = []
    for number, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Worker {number}: expected a mapping, got {item!r}")
        group = item.get("holiday_group")
        workers.append(
            Worker(
                name=str(item.get("name", "")).strip(),
                holiday_group=str(group) if group is not None else None,
            )
        )
    return workers


def workers_from_entries(entries: Iterable[TimeEntry], holiday_group: Optional[str] = None) -> List[Worker]:
    """Derive the worker list from the users named in time entries, sorted by name."""
    names = sorted({entry.user for entry in entries if entry.user})
    return [Worker(name=name, holiday_group=holiday_group) for name in names]


class InMemoryTimeEntrySource:
    """Serves time entries held in memory, per worker and period."""

    def __init__(self, entries: Iterable[TimeEntry]):
        self.entries = list(entries)

    def find_entries(self, user: str, start: date, end: date) -> List[TimeEntry]:
        """
        Return a worker's entries dated within the inclusive period.

        Entries are ordered by date, then by start timestamp.
        """
        found = []
        for entry in self.entries:
            if entry.user != user:
                continue
            day = resolve_entry_date(entry)
            if day is not None and start <= day <= end:
                found.append(entry)

        return sorted(
            found,
            key=lambda e: (resolve_entry_date(e), e.start.time() if e.start else time.min),
        )
