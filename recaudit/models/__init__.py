"""Data models for the RecAudit application."""

from .report import (
    Report,
    Result,
    ErrorDetail,
    TimeError,
    RecordingFile,
    UnprocessableFile,
    REPORT_TIME_FORMAT,
    FILENAME_TIME_FORMAT,
    DATE_FORMAT,
    SECONDS_PER_DAY,
)
from .events import FileAuditEvent

__all__ = [
    "Report",
    "Result",
    "ErrorDetail",
    "TimeError",
    "RecordingFile",
    "UnprocessableFile",
    "REPORT_TIME_FORMAT",
    "FILENAME_TIME_FORMAT",
    "DATE_FORMAT",
    "SECONDS_PER_DAY",
    # Events
    "FileAuditEvent",
]
