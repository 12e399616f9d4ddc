"""
Console output formatting using Rich.
"""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from working_time_act.data.schemas import ComplianceResult, Holiday, ReportPage


def _format_instant(value) -> str:
    return value.strftime("%d.%m.%Y")


def _format_hours(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.2f}"


def _verdict_text(compliant: Optional[bool]) -> Text:
    if compliant is None:
        return Text("-", style="dim")
    if compliant:
        return Text("Compliant", style="bold green")
    return Text("Not compliant", style="bold red")


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize the console formatter.

        Args:
            console: Rich console to print to. A new one is created if omitted.
        """
        self.console = console or Console()

    def print_result(
        self, result: ComplianceResult, user: Optional[str] = None, max_daily_hours: float = 8.0
    ) -> None:
        """
        Print a single compliance result.

        Args:
            result: ComplianceResult to display.
            user: Worker the result belongs to, if known.
            max_daily_hours: Limit the average was compared against.
        """
        self.console.print()
        self.console.rule("[bold blue]Working Time Act Check[/bold blue]")
        self.console.print()

        summary_table = Table(show_header=False, box=None)
        summary_table.add_column("Label", style="cyan", width=22)
        summary_table.add_column("Value", style="white")

        if user:
            summary_table.add_row("Worker:", user)
        summary_table.add_row(
            "Period:",
            f"{_format_instant(result.period_start)} - {_format_instant(result.period_end)}",
        )
        summary_table.add_row("Limit:", f"{max_daily_hours:.2f} h per working day")

        self.console.print(Panel(summary_table, title="[bold]Period[/bold]"))

        calc_table = Table(show_header=False, box=None)
        calc_table.add_column("Label", style="cyan", width=22)
        calc_table.add_column("Value", style="white", justify="right", width=14)

        calc_table.add_row("Working Days:", str(result.workdays))
        calc_table.add_row("Total Hours:", _format_hours(result.total_hours))
        calc_table.add_row("", "─" * 14)
        calc_table.add_row(Text("Average Hours/Day:", style="bold"), Text(_format_hours(result.average), style="bold"))
        calc_table.add_row("Verdict:", _verdict_text(result.compliance))

        self.console.print(Panel(calc_table, title="[bold]Calculation[/bold]"))
        self.console.print()

    def print_report(self, report: ReportPage) -> None:
        """
        Print a page of the compliance report.

        Args:
            report: ReportPage to display.
        """
        self.console.print()
        self.console.rule("[bold blue]Working Time Act Report[/bold blue]")
        self.console.print()

        if not report.rows:
            self.console.print("[dim]No workers match the query.[/dim]")
            self.console.print()
            return

        table = Table()
        table.add_column("User", style="cyan")
        if report.custom_date_range:
            table.add_column("Average (date range)", justify="right")
            for row in report.rows:
                table.add_row(row.user, _format_hours(row.average_daterange))
        else:
            table.add_column("Average (6 months)", justify="right")
            table.add_column("Average (24 weeks)", justify="right")
            table.add_column("Compliance")
            for row in report.rows:
                table.add_row(
                    row.user,
                    _format_hours(row.average_6months),
                    _format_hours(row.average_24weeks),
                    _verdict_text(row.compliance),
                )

        self.console.print(table)
        self.console.print(
            f"[dim]Page {report.page} of {max(report.pages, 1)} ({report.total} workers)[/dim]"
        )
        self.console.print()

    def print_holidays(self, holidays: List[Holiday], title: str = "Holidays") -> None:
        """
        Print a table of holidays.

        Args:
            holidays: List of holidays to display.
            title: Table title.
        """
        if not holidays:
            self.console.print("[dim]No holidays found for this period.[/dim]")
            return

        holiday_table = Table(title=f"[bold]{title}[/bold]")
        holiday_table.add_column("Date", style="cyan", width=12)
        holiday_table.add_column("Day", style="dim", width=12)
        holiday_table.add_column("Name", style="white")

        for holiday in holidays:
            holiday_table.add_row(
                holiday.holiday_date.strftime("%d.%m.%Y"),
                holiday.holiday_date.strftime("%A"),
                holiday.name,
            )

        self.console.print(holiday_table)

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[bold yellow]Warning:[/bold yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[bold green]Success:[/bold green] {message}")
