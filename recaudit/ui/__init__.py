"""Console user interface."""

from .report_console import ReportConsole

__all__ = [
    'ReportConsole'
]
