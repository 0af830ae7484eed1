"""Data models for coverage audit reports."""

from dataclasses import dataclass, field, fields, asdict
from typing import List, Dict, Any


# Timestamp layouts used in report fields and recording filenames
REPORT_TIME_FORMAT = "%Y-%m-%d %H-%M-%S"
FILENAME_TIME_FORMAT = "%Y-%m-%dT%H-%M-%S"
DATE_FORMAT = "%Y-%m-%d"

SECONDS_PER_DAY = 24 * 60 * 60


def _known_fields(model, data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys the model does not define, e.g. from a newer report schema."""
    names = {f.name for f in fields(model)}
    return {key: value for key, value in data.items() if key in names}


@dataclass(frozen=True)
class TimeError:
    """Wall-clock window covered by an incomplete recording."""
    end_time: str
    start_time: str


@dataclass(frozen=True)
class ErrorDetail:
    """A recording file shorter than the completeness threshold."""
    duration: int
    filename: str
    time_error: TimeError


@dataclass(frozen=True)
class RecordingFile:
    """A matched recording file and its measured duration in seconds."""
    duration: int
    filename: str


@dataclass(frozen=True)
class UnprocessableFile:
    """A matched file whose duration or start time could not be determined."""
    filename: str
    reason: str


@dataclass(frozen=True)
class Result:
    """Aggregate coverage statistics for one period."""
    error_percentage: float
    error_time: int
    record_percentage: float
    record_time: int
    total_error: int
    total_recording: int
    total_time: int
    error: List[ErrorDetail] = field(default_factory=list)
    recording_file: List[RecordingFile] = field(default_factory=list)
    unprocessable_file: List[UnprocessableFile] = field(default_factory=list)


@dataclass(frozen=True)
class Report:
    """One audit result for a date range."""
    start_time: str
    end_time: str
    result: Result

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to a JSON-ready dictionary, keys in field order."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Report":
        """Rebuild a report from its dictionary form.

        Args:
            data: Dictionary as produced by to_dict (or read from a report file)

        Returns:
            Report instance
        """
        result = dict(data['result'])
        errors = [
            ErrorDetail(
                duration=item['duration'],
                filename=item['filename'],
                time_error=TimeError(**_known_fields(TimeError, item['time_error']))
            )
            for item in result.pop('error', None) or []
        ]
        recordings = [
            RecordingFile(**_known_fields(RecordingFile, item))
            for item in result.pop('recording_file', None) or []
        ]
        unprocessable = [
            UnprocessableFile(**_known_fields(UnprocessableFile, item))
            for item in result.pop('unprocessable_file', None) or []
        ]

        return cls(
            start_time=data['start_time'],
            end_time=data['end_time'],
            result=Result(
                error=errors,
                recording_file=recordings,
                unprocessable_file=unprocessable,
                **_known_fields(Result, result)
            )
        )
