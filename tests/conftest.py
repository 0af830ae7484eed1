"""Pytest configuration and fixtures for RecAudit tests."""

import pytest
import tempfile
import logging
from pathlib import Path
from typing import Dict, Union

from pubsub import pub

from recaudit.models.report import (
    Report,
    Result,
    ErrorDetail,
    TimeError,
    RecordingFile,
    UnprocessableFile,
)
from recaudit.probe.base import AbstractDurationProbe, ProbeError


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external tools")


class FakeDurationProbe(AbstractDurationProbe):
    """Probe returning canned durations keyed by filename."""

    def __init__(self, durations: Dict[str, Union[int, Exception]] = None):
        self.durations = dict(durations or {})
        self.calls = []

    def get_duration(self, path: str) -> int:
        self.calls.append(path)
        name = Path(path).name
        if name not in self.durations:
            raise ProbeError(path, "no canned duration")
        value = self.durations[name]
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def record_dir(temp_data_dir):
    """Create an empty recordings directory."""
    path = Path(temp_data_dir) / "record"
    path.mkdir()
    return path


@pytest.fixture
def fake_probe():
    """Probe that knows no files."""
    return FakeDurationProbe()


@pytest.fixture
def make_recordings(record_dir):
    """Create empty recording files and a probe that knows their durations."""
    def create(durations: Dict[str, Union[int, Exception]]) -> FakeDurationProbe:
        for filename in durations:
            (record_dir / filename).touch()
        return FakeDurationProbe(durations)

    return create


@pytest.fixture(autouse=True)
def reset_pubsub():
    """Drop pub/sub listeners registered during a test."""
    yield
    pub.unsubAll()


def build_report(start_time: str = "2024-01-09 00-00-00") -> Report:
    return Report(
        start_time=start_time,
        end_time="2024-01-10 00-00-00",
        result=Result(
            error_percentage=120 / 86400 * 100,
            error_time=120,
            record_percentage=86280 / 86400 * 100,
            record_time=86280,
            total_error=1,
            total_recording=2,
            total_time=86400,
            error=[ErrorDetail(
                duration=120,
                filename="2024-01-09T10-00-00.001.mp4",
                time_error=TimeError(end_time="2024-01-09 10-02-00", start_time="2024-01-09 10-00-00")
            )],
            recording_file=[
                RecordingFile(duration=120, filename="2024-01-09T10-00-00.001.mp4"),
                RecordingFile(duration=3600, filename="2024-01-09T11-00-00.001.mp4"),
            ],
            unprocessable_file=[UnprocessableFile(filename="bad-2024-01-09.mp4", reason="broken")]
        )
    )


@pytest.fixture
def report_factory():
    """Build sample reports for a given period start."""
    return build_report


@pytest.fixture
def sample_report():
    """A sample report with one incomplete recording."""
    return build_report()
