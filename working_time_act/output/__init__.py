"""
Console output and file export for compliance results and reports.
"""

from working_time_act.output.formatter import ConsoleFormatter
from working_time_act.output.exporter import ResultExporter

__all__ = ["ConsoleFormatter", "ResultExporter"]
