"""Report generator that audits recording files against daily coverage."""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

from pubsub import pub

from ..models.events import FileAuditEvent
from ..models.report import (
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
from ..probe.base import AbstractDurationProbe, ProbeError

logger = logging.getLogger(__name__)


DEFAULT_ERROR_THRESHOLD_SECONDS = 300


def parse_period_start(start_date: str) -> datetime:
    """Parse a period timestamp in YYYY-MM-DD HH-MM-SS format."""
    try:
        return datetime.strptime(start_date, REPORT_TIME_FORMAT)
    except ValueError:
        raise ValueError(f"Invalid period timestamp '{start_date}', expected YYYY-MM-DD HH-MM-SS")


def parse_recording_start(filename: str) -> datetime:
    """Parse the start time embedded before the first '.' of a recording filename.

    Args:
        filename: Name like 2024-01-09T10-00-00.001.mp4

    Returns:
        Recording start time
    """
    stamp = filename.split('.', 1)[0]
    try:
        return datetime.strptime(stamp, FILENAME_TIME_FORMAT)
    except ValueError:
        raise ValueError(f"Cannot parse start time from filename '{filename}'")


def build_time_error(filename: str, duration: int) -> TimeError:
    """Compute the wall-clock window of an incomplete recording."""
    start_time = parse_recording_start(filename)
    end_time = start_time + timedelta(seconds=duration)
    return TimeError(
        end_time=end_time.strftime(REPORT_TIME_FORMAT),
        start_time=start_time.strftime(REPORT_TIME_FORMAT)
    )


class ReportGenerator:
    """Builds coverage reports for a directory of recordings."""

    def __init__(self,
                 probe: AbstractDurationProbe,
                 error_threshold_seconds: int = DEFAULT_ERROR_THRESHOLD_SECONDS,
                 extension: str = ".mp4",
                 fail_fast: bool = False,
                 topic: Optional[str] = "audit.file"):
        """Initialize report generator.

        Args:
            probe: Duration probe used to measure each recording
            error_threshold_seconds: Recordings shorter than this are errors
            extension: Filename suffix of recording files
            fail_fast: Re-raise the first per-file failure instead of recording it
            topic: Pub/sub topic for per-file audit events, None to disable
        """
        self.probe = probe
        self.error_threshold_seconds = error_threshold_seconds
        self.extension = extension
        self.fail_fast = fail_fast
        self.topic = topic
        self.total_time = SECONDS_PER_DAY

        logger.info(f"ReportGenerator initialized (threshold={error_threshold_seconds}s, "
                    f"extension={extension}, fail_fast={fail_fast})")

    def find_recording_files(self, start_date: str, directory: str) -> List[str]:
        """List recording files for the calendar day of a period start.

        Args:
            start_date: Period start in YYYY-MM-DD HH-MM-SS format
            directory: Directory holding the recordings

        Returns:
            Matching filenames, sorted
        """
        date_string = parse_period_start(start_date).strftime(DATE_FORMAT)

        try:
            entries = list(Path(directory).iterdir())
        except OSError as e:
            logger.error(f"Error reading directory {directory}: {e}")
            raise

        files = sorted(
            entry.name for entry in entries
            if entry.is_file()
            and date_string in entry.name
            and entry.name.endswith(self.extension)
        )

        logger.debug(f"Found {len(files)} recording files for {date_string} in {directory}")
        return files

    def generate_report(self, start_date: str, end_date: str, directory: str) -> Report:
        """Audit the recordings of one period.

        Args:
            start_date: Period start in YYYY-MM-DD HH-MM-SS format
            end_date: Period end, copied into the report as given
            directory: Directory holding the recordings

        Returns:
            Fully populated Report
        """
        files = self.find_recording_files(start_date, directory)
        logger.info(f"Auditing {len(files)} recordings for period {start_date} -> {end_date}")

        error_time = 0
        error_details: List[ErrorDetail] = []
        recording_files: List[RecordingFile] = []
        unprocessable_files: List[UnprocessableFile] = []

        for sequence_number, filename in enumerate(files, 1):
            file_path = str(Path(directory) / filename)

            try:
                duration = self.probe.get_duration(file_path)
                detail = None
                if duration < self.error_threshold_seconds:
                    detail = ErrorDetail(
                        duration=duration,
                        filename=filename,
                        time_error=build_time_error(filename, duration)
                    )
            except (ProbeError, ValueError) as e:
                if self.fail_fast:
                    raise
                logger.warning(f"Skipping unprocessable recording {filename}: {e}")
                unprocessable_files.append(UnprocessableFile(filename=filename, reason=str(e)))
                self._publish(FileAuditEvent(
                    filename=filename,
                    status="unprocessable",
                    sequence_number=sequence_number,
                    total_files=len(files),
                    reason=str(e)
                ))
                continue

            if detail is not None:
                error_time += duration
                error_details.append(detail)
                logger.debug(f"Incomplete recording {filename}: {duration}s")

            recording_files.append(RecordingFile(duration=duration, filename=filename))
            self._publish(FileAuditEvent(
                filename=filename,
                status="error" if detail is not None else "recorded",
                sequence_number=sequence_number,
                total_files=len(files),
                duration=duration
            ))

        if recording_files:
            record_time = self.total_time - error_time
        else:
            # Nothing recorded at all: the whole period is missing
            record_time = 0
        error_time = self.total_time - record_time

        report = Report(
            start_time=start_date,
            end_time=end_date,
            result=Result(
                error_percentage=error_time / self.total_time * 100,
                error_time=error_time,
                record_percentage=record_time / self.total_time * 100,
                record_time=record_time,
                total_error=len(error_details),
                total_recording=len(recording_files),
                total_time=self.total_time,
                error=error_details,
                recording_file=recording_files,
                unprocessable_file=unprocessable_files
            )
        )

        logger.info(f"Report for {start_date}: {len(recording_files)} recordings, "
                    f"{len(error_details)} errors, {len(unprocessable_files)} unprocessable, "
                    f"record {report.result.record_percentage:.2f}%")
        return report

    def _publish(self, event: FileAuditEvent) -> None:
        if self.topic:
            pub.sendMessage(self.topic, event=event)
