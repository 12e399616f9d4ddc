"""
Tests for the command line interface.
"""

import csv
import json

import pytest
from click.testing import CliRunner

from working_time_act.cli import main, parse_date


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def settings(tmp_path):
    """Config file without a default holiday group, writing into tmp_path."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        "holidays:\n"
        "  default_group: null\n"
        "  groups:\n"
        "    1: HH\n"
        "    2: BY\n"
        "output:\n"
        "  format: console\n"
        f"  directory: {tmp_path / 'results'}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def entries_file(tmp_path):
    """Alice 8 hours and Bob 10 hours per day, Monday 2026-01-05 to Friday 2026-01-09."""
    path = tmp_path / "entries.csv"
    lines = ["user,begin,date,duration"]
    for day in range(5, 10):
        lines.append(f"Alice,2026-01-{day:02d}T09:00:00,,28800")
        lines.append(f"Bob,2026-01-{day:02d}T08:00:00,,36000")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class TestParseDate:
    """Tests for parse_date."""

    @pytest.mark.parametrize("value", ["2026-01-05", "05.01.2026", "05/01/2026"])
    def test_formats(self, value):
        assert parse_date(value).isoformat() == "2026-01-05"

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("January 5th")


class TestCheckCommand:
    """Tests for the check command."""

    def test_json_output(self, runner, settings, entries_file, tmp_path):
        output = tmp_path / "result.json"

        result = runner.invoke(main, [
            "check", "-i", str(entries_file), "-s", "2026-01-05", "-e", "09.01.2026",
            "-u", "Bob", "-f", "json", "-o", str(output), "-c", str(settings),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["user"] == "Bob"
        assert data["calculation"] == {"workdays": 5, "total_hours": 50.0, "average": 10.0}
        assert data["compliance"] is False

    def test_holiday_group(self, runner, settings, entries_file, tmp_path):
        output = tmp_path / "result.json"

        result = runner.invoke(main, [
            "check", "-i", str(entries_file), "-s", "2026-01-05", "-e", "2026-01-09",
            "-u", "Alice", "-g", "2", "-f", "json", "-o", str(output), "-c", str(settings),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["calculation"]["workdays"] == 4

    def test_console_output(self, runner, settings, entries_file):
        result = runner.invoke(main, [
            "check", "-i", str(entries_file), "-s", "2026-01-05", "-e", "2026-01-09",
            "-u", "Alice", "-c", str(settings),
        ])

        assert result.exit_code == 0, result.output
        assert "Compliant" in result.output
        assert "8.00" in result.output

    def test_output_suffix_selects_format(self, runner, settings, entries_file, tmp_path):
        """An --output path without --format is written in the format of its suffix."""
        json_output = tmp_path / "result.json"
        csv_output = tmp_path / "result.csv"
        args = ["check", "-i", str(entries_file), "-s", "2026-01-05", "-e", "2026-01-09",
                "-u", "Alice", "-c", str(settings)]

        assert runner.invoke(main, args + ["-o", str(json_output)]).exit_code == 0
        assert runner.invoke(main, args + ["-o", str(csv_output)]).exit_code == 0

        assert json.loads(json_output.read_text(encoding="utf-8"))["calculation"]["workdays"] == 5
        with open(csv_output, newline="", encoding="utf-8") as f:
            assert next(csv.reader(f))[0] == "User"

    def test_output_with_console_format_warns(self, runner, settings, entries_file, tmp_path):
        output = tmp_path / "result.json"

        result = runner.invoke(main, [
            "check", "-i", str(entries_file), "-s", "2026-01-05", "-e", "2026-01-09",
            "-f", "console", "-o", str(output), "-c", str(settings),
        ])

        assert result.exit_code == 0, result.output
        assert "Warning:" in result.output
        assert not output.exists()

    def test_invalid_period(self, runner, settings, entries_file):
        result = runner.invoke(main, [
            "check", "-i", str(entries_file), "-s", "2026-01-09", "-e", "2026-01-05",
            "-c", str(settings),
        ])

        assert result.exit_code == 1
        assert "Period start must be before period end" in result.output


class TestReportCommand:
    """Tests for the report command."""

    def test_csv_custom_range(self, runner, settings, entries_file, tmp_path):
        output = tmp_path / "report.csv"

        result = runner.invoke(main, [
            "report", "-i", str(entries_file), "-s", "2026-01-05", "-e", "2026-01-09",
            "--order-by", "average_daterange", "--order", "desc",
            "-f", "csv", "-o", str(output), "-c", str(settings),
        ])

        assert result.exit_code == 0, result.output
        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows == [["user", "average_daterange"], ["Bob", "10.0"], ["Alice", "8.0"]]

    def test_workers_file(self, runner, settings, entries_file, tmp_path):
        workers = tmp_path / "workers.yaml"
        workers.write_text(
            "- name: Alice\n  holiday_group: 2\n- name: Bob\n  holiday_group: 1\n",
            encoding="utf-8",
        )
        output = tmp_path / "report.json"

        result = runner.invoke(main, [
            "report", "-i", str(entries_file), "-w", str(workers),
            "-s", "2026-01-05", "-e", "2026-01-09", "-q", "alice",
            "-f", "json", "-o", str(output), "-c", str(settings),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        # Epiphany is a holiday in Bavaria
        assert data["rows"] == [
            {
                "user": "Alice",
                "average_daterange": 8.0,
                "average_6months": None,
                "average_24weeks": None,
                "compliance": None,
            }
        ]
        assert data["total"] == 1

    def test_worker_file_of_names(self, runner, settings, entries_file, tmp_path):
        """A worker file without mappings is reported as an error, not a traceback."""
        workers = tmp_path / "workers.yaml"
        workers.write_text("- alice\n- bob\n", encoding="utf-8")

        result = runner.invoke(main, [
            "report", "-i", str(entries_file), "-w", str(workers), "-c", str(settings),
        ])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "expected a mapping" in result.output

    def test_default_periods_console(self, runner, settings, entries_file):
        result = runner.invoke(main, ["report", "-i", str(entries_file), "-c", str(settings)])

        assert result.exit_code == 0, result.output
        assert "Alice" in result.output
        assert "Bob" in result.output

    def test_half_range(self, runner, settings, entries_file):
        result = runner.invoke(main, [
            "report", "-i", str(entries_file), "-s", "2026-01-05", "-c", str(settings),
        ])

        assert result.exit_code == 1
        assert "--start and --end" in result.output


class TestHolidaysCommand:
    """Tests for the holidays command."""

    def test_list_and_export(self, runner, settings, tmp_path):
        output = tmp_path / "holidays.csv"

        result = runner.invoke(main, [
            "holidays", "-y", "2026", "-g", "BY", "-o", str(output), "-c", str(settings),
        ])

        assert result.exit_code == 0, result.output
        content = output.read_text(encoding="utf-8")
        assert "2026-01-06" in content

    def test_unknown_group(self, runner, settings):
        result = runner.invoke(main, ["holidays", "-y", "2026", "-g", "XX", "-c", str(settings)])

        assert result.exit_code == 1
