"""
MCP Server for the Working Time Act checker.

Exposes the compliance check to MCP clients.

Supports two transport modes:
- stdio: For local desktop integration
- sse: For HTTP-based integration (Docker, remote servers)
"""

import argparse
import logging
import os
import sys
from datetime import date
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from working_time_act.config.manager import ConfigManager
from working_time_act.core.evaluator import ComplianceEvaluator
from working_time_act.core.holiday_provider import HolidayProvider
from working_time_act.data.loader import TimeEntryLoader

logger = logging.getLogger(__name__)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
holiday_provider = HolidayProvider.from_config(config)
evaluator = ComplianceEvaluator.from_config(config, holiday_provider)


def check_compliance(
    start_date: str,
    end_date: str,
    entries: List[dict],
    holiday_group: Optional[str] = None,
) -> dict:
    """
    Check a worker's time entries against the German Working Time Act.

    The average worked hours per working day (every day except Sunday and
    public holidays of the holiday group) must not exceed 8 hours.

    Args:
        start_date: Start date in format YYYY-MM-DD (e.g., "2026-01-05")
        end_date: End date in format YYYY-MM-DD (e.g., "2026-06-30")
        entries: Time entries, each with "begin" (ISO timestamp) or "date"
                 (YYYY-MM-DD) and "duration" in seconds
        holiday_group: Holiday group identifier or Bundesland code (e.g., "HH")

    Returns:
        Dictionary with:
        - compliance: Whether the average stays within the limit
        - average: Average hours per working day
        - total_hours: Hours worked on working days
        - workdays: Number of working days

    Example:
        >>> check_compliance("2026-01-05", "2026-01-09",
        ...     [{"begin": "2026-01-05T09:00:00", "duration": 28800}], "HH")
    """
    try:
        start = date.fromisoformat(start_date)
        end = date.fromisoformat(end_date)
    except ValueError as e:
        return {"error": f"Invalid date format. Use YYYY-MM-DD. Details: {str(e)}"}

    try:
        time_entries = TimeEntryLoader().parse_records(entries)
        group = holiday_group or config.default_holiday_group
        result = evaluator.evaluate(time_entries, group, start, end)
    except ValueError as e:
        return {"error": str(e)}

    return {
        "compliance": result.compliance,
        "average": result.average,
        "total_hours": result.total_hours,
        "workdays": result.workdays,
        "period_start": start.isoformat(),
        "period_end": end.isoformat(),
        "max_daily_hours": evaluator.max_daily_hours,
    }


def get_holidays(year: int, holiday_group: str) -> dict:
    """
    Get all public holidays for a year and holiday group.

    Args:
        year: Year to get holidays for (e.g., 2026)
        holiday_group: Holiday group identifier or Bundesland code (e.g., "BY")

    Returns:
        Dictionary with the year, the group and its holidays (date and name).
    """
    if year < 1900 or year > 2100:
        return {"error": "Year must be between 1900 and 2100"}

    try:
        holidays = holiday_provider.get_holidays_for_year(year, holiday_group)
    except ValueError as e:
        return {"error": str(e)}

    return {
        "year": year,
        "holiday_group": holiday_group,
        "holiday_count": len(holidays),
        "holidays": [
            {"date": h.holiday_date.isoformat(), "name": h.name}
            for h in holidays
        ],
    }


def create_mcp_server(host: str = "127.0.0.1", port: int = 8000) -> FastMCP:
    """Create and configure the MCP server with tools."""
    mcp = FastMCP("Working Time Act", host=host, port=port)
    mcp.tool()(check_compliance)
    mcp.tool()(get_holidays)
    return mcp


def main():
    """Run the MCP server with configurable transport.

    Transport can be set via:
    - Command line: --transport sse --port 8080
    - Environment: MCP_TRANSPORT=sse MCP_PORT=8080 MCP_HOST=0.0.0.0
    """
    parser = argparse.ArgumentParser(description="Working Time Act MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=os.environ.get("MCP_TRANSPORT", "stdio"),
        help="Transport mode: stdio (default) or sse for HTTP",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("MCP_HOST", "0.0.0.0"),
        help="Host to bind to (SSE mode only, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MCP_PORT", "8080")),
        help="Port to listen on (SSE mode only, default: 8080)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    # stdio carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    mcp = create_mcp_server(host=args.host, port=args.port)

    logger.info(f"Starting MCP server with {args.transport} transport")
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
