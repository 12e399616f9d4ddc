"""
Export functionality for compliance results and reports.
"""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from working_time_act.data.schemas import ComplianceResult, Holiday, ReportPage

logger = logging.getLogger(__name__)


class ResultExporter:
    """Exports compliance results to JSON and CSV files."""

    def __init__(
        self,
        output_directory: str = "results",
        timestamp_format: str = "%Y%m%d_%H%M%S",
    ):
        """
        Initialize the result exporter.

        Args:
            output_directory: Directory for output files.
            timestamp_format: Format string for timestamps in filenames.
        """
        self.output_directory = output_directory
        self.timestamp_format = timestamp_format

    def _ensure_output_dir(self) -> Path:
        """Ensure output directory exists and return path."""
        output_path = Path(self.output_directory)
        output_path.mkdir(parents=True, exist_ok=True)
        return output_path

    def _generate_filename(self, prefix: str, extension: str) -> str:
        """Generate a filename with timestamp."""
        timestamp = datetime.now().strftime(self.timestamp_format)
        return f"{prefix}_{timestamp}.{extension}"

    def _resolve_path(self, output_path: Optional[str], prefix: str, extension: str) -> Path:
        """Use the given path, or a timestamped file in the output directory."""
        if output_path:
            file_path = Path(output_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            return file_path
        return self._ensure_output_dir() / self._generate_filename(prefix, extension)

    def export_json(
        self, result: ComplianceResult, output_path: Optional[str] = None, user: Optional[str] = None
    ) -> str:
        """
        Export a result to a JSON file.

        Args:
            result: ComplianceResult to export.
            output_path: Optional specific output path.
            user: Worker the result belongs to, if known.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(output_path, "compliance", "json")

        result_dict = self.result_to_dict(result)
        if user:
            result_dict = {"user": user, **result_dict}

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(result_dict, f, indent=2, ensure_ascii=False)

        logger.info(f"Exported result to: {file_path}")
        return str(file_path)

    def export_csv(
        self, result: ComplianceResult, output_path: Optional[str] = None, user: Optional[str] = None
    ) -> str:
        """
        Export a result to a CSV file.

        Args:
            result: ComplianceResult to export.
            output_path: Optional specific output path.
            user: Worker the result belongs to, if known.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(output_path, "compliance", "csv")

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow([
                "User",
                "Period Start",
                "Period End",
                "Working Days",
                "Total Hours",
                "Average",
                "Compliance",
            ])
            writer.writerow([
                user or "",
                result.period_start.isoformat(),
                result.period_end.isoformat(),
                result.workdays,
                result.total_hours,
                result.average,
                result.compliance,
            ])

        logger.info(f"Exported result to: {file_path}")
        return str(file_path)

    def export_report_json(self, report: ReportPage, output_path: Optional[str] = None) -> str:
        """
        Export a report page to a JSON file.

        Args:
            report: ReportPage to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(output_path, "report", "json")

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(report.model_dump(), f, indent=2, ensure_ascii=False)

        logger.info(f"Exported {len(report.rows)} report rows to: {file_path}")
        return str(file_path)

    def export_report_csv(self, report: ReportPage, output_path: Optional[str] = None) -> str:
        """
        Export a report page to a CSV file.

        The columns follow the report kind: one average for a custom date
        range, otherwise both default-period averages and the verdict.

        Args:
            report: ReportPage to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(output_path, "report", "csv")

        if report.custom_date_range:
            columns = ["user", "average_daterange"]
        else:
            columns = ["user", "average_6months", "average_24weeks", "compliance"]

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(columns)
            for row in report.rows:
                writer.writerow([getattr(row, column) for column in columns])

        logger.info(f"Exported {len(report.rows)} report rows to: {file_path}")
        return str(file_path)

    def export_holidays_csv(self, holidays: List[Holiday], output_path: Optional[str] = None) -> str:
        """
        Export holidays list to CSV file.

        Args:
            holidays: List of holidays to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(output_path, "holidays", "csv")

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Date", "Name"])
            for holiday in holidays:
                writer.writerow([holiday.holiday_date.isoformat(), holiday.name])

        logger.info(f"Exported {len(holidays)} holidays to: {file_path}")
        return str(file_path)

    def result_to_dict(self, result: ComplianceResult) -> dict:
        """
        Convert a ComplianceResult to a JSON-serializable dictionary.

        Args:
            result: ComplianceResult to convert.

        Returns:
            Dictionary representation.
        """
        return {
            "period_start": result.period_start.isoformat(),
            "period_end": result.period_end.isoformat(),
            "calculation": {
                "workdays": result.workdays,
                "total_hours": result.total_hours,
                "average": result.average,
            },
            "compliance": result.compliance,
        }
