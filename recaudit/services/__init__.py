"""Services layer for RecAudit application logic."""

from .report_generator import ReportGenerator

__all__ = [
    "ReportGenerator"
]
