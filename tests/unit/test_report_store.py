"""Unit tests for ReportStore class."""

import pytest
import json
import os
from pathlib import Path

from recaudit.storage.report_store import ReportStore


@pytest.mark.unit
class TestReportStore:
    """Test cases for ReportStore class."""

    def test_export_path(self, temp_data_dir, report_factory):
        store = ReportStore(os.path.join(temp_data_dir, "report"))

        path = store.export(report_factory())

        assert path == os.path.join(temp_data_dir, "report", "report_2024-01-09 00-00-00.json")
        assert os.path.exists(path)

    def test_export_schema(self, temp_data_dir, report_factory):
        store = ReportStore(temp_data_dir)

        path = store.export(report_factory())
        with open(path, 'r') as f:
            text = f.read()
        data = json.loads(text)

        assert list(data) == ["start_time", "end_time", "result"]
        assert list(data["result"]) == [
            "error_percentage", "error_time", "record_percentage", "record_time",
            "total_error", "total_recording", "total_time",
            "error", "recording_file", "unprocessable_file",
        ]
        assert data["result"]["error"][0] == {
            "duration": 120,
            "filename": "2024-01-09T10-00-00.001.mp4",
            "time_error": {"end_time": "2024-01-09 10-02-00", "start_time": "2024-01-09 10-00-00"},
        }
        assert data["result"]["recording_file"][1] == {"duration": 3600, "filename": "2024-01-09T11-00-00.001.mp4"}
        # Four-space indentation
        assert '\n    "start_time"' in text

    def test_export_replaces_existing_file(self, temp_data_dir, report_factory):
        store = ReportStore(temp_data_dir)
        target = store.get_report_path("2024-01-09 00-00-00")
        target.write_text("x" * 100000)

        path = store.export(report_factory())

        assert Path(path).read_text() == json.dumps(report_factory().to_dict(), indent=4)

    def test_load_report(self, temp_data_dir, report_factory):
        store = ReportStore(temp_data_dir)
        original = report_factory()
        store.export(original)

        loaded = store.load_report(original.start_time)

        assert loaded == original

    def test_load_report_ignores_unknown_keys(self, temp_data_dir, report_factory):
        store = ReportStore(temp_data_dir)
        original = report_factory()
        data = original.to_dict()
        data["generator"] = "recaudit 9.9"
        data["result"]["gap_time"] = 42
        data["result"]["recording_file"][0]["codec"] = "h264"
        data["result"]["error"][0]["time_error"]["zone"] = "UTC"
        store.get_report_path(original.start_time).write_text(json.dumps(data))

        assert store.load_report(original.start_time) == original

    def test_load_missing_report(self, temp_data_dir):
        store = ReportStore(temp_data_dir)

        assert store.load_report("2024-01-09 00-00-00") is None

    def test_list_reports(self, temp_data_dir, report_factory):
        store = ReportStore(temp_data_dir)
        store.export(report_factory("2024-01-11 00-00-00"))
        store.export(report_factory("2024-01-09 00-00-00"))
        Path(temp_data_dir, "notes.txt").touch()

        assert store.list_reports() == ["2024-01-09 00-00-00", "2024-01-11 00-00-00"]

    def test_list_reports_missing_directory(self, temp_data_dir):
        store = ReportStore(os.path.join(temp_data_dir, "missing"))

        assert store.list_reports() == []
