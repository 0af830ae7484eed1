"""Report storage: JSON export and read-back of coverage reports."""

import json
import logging
from pathlib import Path
from typing import List, Optional

from ..models.report import Report


logger = logging.getLogger(__name__)

REPORT_PREFIX = "report_"
REPORT_SUFFIX = ".json"


class ReportStore:
    """Writes coverage reports to, and reads them from, a report directory."""

    def __init__(self, report_dir: str = "report"):
        """Initialize report store.

        Args:
            report_dir: Directory holding report_<start_time>.json files
        """
        self.report_dir = Path(report_dir)
        logger.info(f"ReportStore initialized with report_dir: {self.report_dir}")

    def get_report_path(self, start_time: str) -> Path:
        """Get the file path of the report for a period start."""
        return self.report_dir / f"{REPORT_PREFIX}{start_time}{REPORT_SUFFIX}"

    def export(self, report: Report) -> str:
        """Save a report as indented JSON, replacing any previous file.

        Args:
            report: Report to save

        Returns:
            Path to saved report file
        """
        report_json = json.dumps(report.to_dict(), indent=4)

        self.report_dir.mkdir(parents=True, exist_ok=True)
        save_file = self.get_report_path(report.start_time)

        try:
            if save_file.exists():
                save_file.unlink()
                logger.debug(f"Removed existing report: {save_file}")

            with open(save_file, 'w', encoding='utf-8') as f:
                f.write(report_json)

        except OSError as e:
            logger.error(f"Error saving report {save_file}: {e}")
            raise

        logger.info(f"Report saved: {save_file}")
        return str(save_file)

    def load_report(self, start_time: str) -> Optional[Report]:
        """Load a stored report.

        Args:
            start_time: Period start the report was saved under

        Returns:
            Report or None if not found
        """
        report_file = self.get_report_path(start_time)

        if not report_file.exists():
            logger.warning(f"Report file not found: {report_file}")
            return None

        with open(report_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return Report.from_dict(data)

    def list_reports(self) -> List[str]:
        """List the period starts of all stored reports.

        Returns:
            Start timestamps, sorted
        """
        if not self.report_dir.is_dir():
            return []

        starts = [
            path.name[len(REPORT_PREFIX):-len(REPORT_SUFFIX)]
            for path in self.report_dir.iterdir()
            if path.is_file()
            and path.name.startswith(REPORT_PREFIX)
            and path.name.endswith(REPORT_SUFFIX)
        ]
        starts.sort()
        logger.debug(f"Found {len(starts)} stored reports")
        return starts
