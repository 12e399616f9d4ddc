"""
CLI interface for the working time act checker.
"""

import logging
import sys
from datetime import date, datetime

import click

from working_time_act import __version__
from working_time_act.config.manager import ConfigManager
from working_time_act.core.evaluator import ComplianceEvaluator
from working_time_act.core.holiday_provider import HolidayProvider
from working_time_act.core.report import ORDER_ALLOWED, ComplianceReporter
from working_time_act.data.loader import (
    InMemoryTimeEntrySource,
    TimeEntryLoader,
    load_workers,
    workers_from_entries,
)
from working_time_act.data.schemas import ComplianceQuery, SortOrder
from working_time_act.output.exporter import ResultExporter
from working_time_act.output.formatter import ConsoleFormatter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_date(date_str: str) -> date:
    """Parse date string in various formats."""
    formats = ["%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y"]
    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    raise ValueError(
        f"Invalid date format: {date_str}. Use YYYY-MM-DD, DD.MM.YYYY, or DD/MM/YYYY"
    )


def resolve_output_format(format, output, default: str, formatter: ConsoleFormatter) -> str:
    """
    Pick the output format of a command.

    An explicit --format wins. Without one, an --output path selects CSV for
    a .csv suffix and JSON otherwise; with neither the configured default is
    used. An --output path next to console output is reported as ignored.
    """
    if format:
        output_format = format
    elif output:
        output_format = "csv" if output.lower().endswith(".csv") else "json"
    else:
        output_format = default

    if output and output_format == "console":
        formatter.print_warning(f"Output file {output} ignored for console output")
    return output_format


def load_settings(config_path, verbose: bool):
    """Load configuration and apply its log level."""
    cfg = ConfigManager(config_path).load_config()
    logging.getLogger().setLevel(logging.DEBUG if verbose else cfg.log_level)
    return cfg


@click.group()
@click.version_option(version=__version__, prog_name="working-time-act")
def main():
    """Working Time Act Checker - average daily working time per § 3 ArbZG."""
    pass


@main.command()
@click.option(
    "--entries", "-i",
    type=click.Path(exists=True),
    required=True,
    help="Time entry file (.csv or .json)",
)
@click.option(
    "--start", "-s",
    required=True,
    help="Start date (YYYY-MM-DD, DD.MM.YYYY, or DD/MM/YYYY)",
)
@click.option(
    "--end", "-e",
    required=True,
    help="End date (YYYY-MM-DD, DD.MM.YYYY, or DD/MM/YYYY)",
)
@click.option(
    "--user", "-u",
    help="Only use entries of this worker",
)
@click.option(
    "--group", "-g",
    help="Holiday group identifier (default: from config)",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output file path (optional)",
)
@click.option(
    "--format", "-f",
    type=click.Choice(["json", "csv", "console"]),
    default=None,
    help="Output format (default: from the --output suffix, else from config)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def check(entries, start, end, user, group, output, format, config, verbose):
    """Check the time entries of one worker for a period."""
    formatter = ConsoleFormatter()

    try:
        cfg = load_settings(config, verbose)
        start_date = parse_date(start)
        end_date = parse_date(end)

        time_entries = TimeEntryLoader().load(entries)
        if user:
            time_entries = [e for e in time_entries if e.user == user]

        holiday_group = group or cfg.default_holiday_group
        evaluator = ComplianceEvaluator.from_config(cfg, HolidayProvider.from_config(cfg))
        result = evaluator.evaluate(time_entries, holiday_group, start_date, end_date)

        output_format = resolve_output_format(format, output, cfg.output_format, formatter)
        if output_format == "json":
            path = ResultExporter(cfg.output_directory).export_json(result, output, user=user)
            formatter.print_success(f"Result saved to {path}")
        elif output_format == "csv":
            path = ResultExporter(cfg.output_directory).export_csv(result, output, user=user)
            formatter.print_success(f"Result saved to {path}")
        else:
            formatter.print_result(result, user=user, max_daily_hours=cfg.max_daily_hours)

    except (FileNotFoundError, ValueError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.option(
    "--entries", "-i",
    type=click.Path(exists=True),
    required=True,
    help="Time entry file (.csv or .json)",
)
@click.option(
    "--workers", "-w",
    type=click.Path(exists=True),
    help="Worker file (.yaml or .json); default: users found in the entries",
)
@click.option("--user", "-u", "users", multiple=True, help="Worker to include (repeatable)")
@click.option("--start", "-s", help="Start of a custom date range")
@click.option("--end", "-e", help="End of a custom date range")
@click.option("--search", "-q", help="Search term")
@click.option(
    "--order-by",
    type=click.Choice(ORDER_ALLOWED),
    default="user",
    help="Column to sort by",
)
@click.option(
    "--order",
    type=click.Choice([o.value for o in SortOrder], case_sensitive=False),
    default=SortOrder.ASC.value,
    help="Sort direction",
)
@click.option("--page", type=int, default=1, help="Page number")
@click.option("--page-size", type=int, default=50, help="Rows per page")
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output file path (optional)",
)
@click.option(
    "--format", "-f",
    type=click.Choice(["json", "csv", "console"]),
    default=None,
    help="Output format (default: from the --output suffix, else from config)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def report(
    entries, workers, users, start, end, search, order_by, order, page, page_size,
    output, format, config, verbose,
):
    """
    Report compliance for several workers.

    Without --start/--end every worker is checked over the last six months
    and the last 24 weeks.
    """
    formatter = ConsoleFormatter()

    try:
        cfg = load_settings(config, verbose)
        if bool(start) != bool(end):
            raise ValueError("Provide both --start and --end for a custom date range")

        query = ComplianceQuery(
            users=list(users),
            begin=parse_date(start) if start else None,
            end=parse_date(end) if end else None,
            search_term=search,
            order_by=order_by,
            order=order,
            page=page,
            page_size=page_size,
        )

        time_entries = TimeEntryLoader().load(entries)
        worker_list = load_workers(workers) if workers else workers_from_entries(time_entries)

        evaluator = ComplianceEvaluator.from_config(cfg, HolidayProvider.from_config(cfg))
        reporter = ComplianceReporter(
            evaluator,
            InMemoryTimeEntrySource(time_entries),
            worker_list,
            default_holiday_group=cfg.default_holiday_group,
        )
        result = reporter.build_report(query)

        output_format = resolve_output_format(format, output, cfg.output_format, formatter)
        if output_format == "json":
            path = ResultExporter(cfg.output_directory).export_report_json(result, output)
            formatter.print_success(f"Report saved to {path}")
        elif output_format == "csv":
            path = ResultExporter(cfg.output_directory).export_report_csv(result, output)
            formatter.print_success(f"Report saved to {path}")
        else:
            formatter.print_report(result)

    except (FileNotFoundError, ValueError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.option(
    "--year", "-y",
    type=int,
    default=None,
    help="Year to show holidays for (default: current year)",
)
@click.option(
    "--group", "-g",
    required=True,
    help="Holiday group identifier or subdivision code (e.g., HH, BY)",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output CSV file path (optional)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
def holidays(year, group, output, config):
    """List the public holidays of a holiday group."""
    formatter = ConsoleFormatter()

    try:
        if year is None:
            year = date.today().year

        cfg = load_settings(config, False)
        holiday_list = HolidayProvider.from_config(cfg).get_holidays_for_year(year, group)

        formatter.print_holidays(holiday_list, title=f"Holidays {year} - {group}")

        if output:
            path = ResultExporter(cfg.output_directory).export_holidays_csv(holiday_list, output)
            formatter.print_success(f"Holidays saved to {path}")

    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.option(
    "--host", "-h",
    default=None,
    help="Host to bind to (default: from config or 0.0.0.0)",
)
@click.option(
    "--port", "-p",
    type=int,
    default=None,
    help="Port to bind to (default: from config or 8000)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
def serve(host, port, config):
    """Start the FastAPI server."""
    formatter = ConsoleFormatter()

    try:
        import uvicorn
    except ImportError:
        formatter.print_error("uvicorn is required for the API server. Install it with: pip install uvicorn")
        sys.exit(1)

    try:
        cfg = load_settings(config, False)
    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)

    api_host = host or cfg.api_host
    api_port = port or cfg.api_port

    formatter.console.print(f"Starting API server at http://{api_host}:{api_port}")
    formatter.console.print("Press Ctrl+C to stop")
    formatter.console.print()

    uvicorn.run(
        "working_time_act.api:app",
        host=api_host,
        port=api_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
