"""Console output for audit progress and report summaries."""

import logging
from typing import Optional

from pubsub import pub
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models.events import FileAuditEvent
from ..models.report import Report

logger = logging.getLogger(__name__)


STATUS_STYLES = {
    "recorded": "green",
    "error": "yellow",
    "unprocessable": "red",
}


class ReportConsole:
    """Prints per-file audit events and report summaries with rich."""

    def __init__(self, console: Optional[Console] = None, topic: str = "audit.file", verbose: bool = False):
        """Initialize report console.

        Args:
            console: Rich console to print to (stdout if None)
            topic: Pub/sub topic carrying FileAuditEvent messages
            verbose: Print every file, not only errors and unprocessable ones
        """
        self.console = console or Console()
        self.topic = topic
        self.verbose = verbose

        pub.subscribe(self._on_file_event, topic)
        logger.debug(f"ReportConsole subscribed to {topic}")

    def _on_file_event(self, event: FileAuditEvent) -> None:
        if event.status == "recorded" and not self.verbose:
            return

        style = STATUS_STYLES.get(event.status, "white")
        progress = f"[{event.sequence_number}/{event.total_files}]"
        if event.status == "unprocessable":
            self.console.print(f"{progress} {event.filename}: unprocessable ({event.reason})", style=style, markup=False)
        else:
            self.console.print(f"{progress} {event.filename}: {event.duration}s {event.status}", style=style, markup=False)

    def print_summary(self, report: Report, saved_path: Optional[str] = None) -> None:
        """Print a summary table for one report."""
        result = report.result

        self.console.print(f"📊 Coverage {escape(report.start_time)} -> {escape(report.end_time)}", style="bold blue")
        table = Table()
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")

        table.add_row("Recordings", str(result.total_recording))
        table.add_row("Incomplete recordings", str(result.total_error))
        table.add_row("Unprocessable files", str(len(result.unprocessable_file)))
        table.add_row("Recorded time", f"{result.record_time}s ({result.record_percentage:.2f}%)")
        table.add_row("Missing time", f"{result.error_time}s ({result.error_percentage:.2f}%)")
        table.add_row("Period length", f"{result.total_time}s")

        self.console.print(table)

        if result.error:
            errors = Table(title="Incomplete recordings")
            errors.add_column("File")
            errors.add_column("Duration", justify="right")
            errors.add_column("Window")
            for detail in result.error:
                errors.add_row(
                    escape(detail.filename),
                    f"{detail.duration}s",
                    escape(f"{detail.time_error.start_time} -> {detail.time_error.end_time}")
                )
            self.console.print(errors)

        if saved_path:
            self.console.print(f"✅ Report saved: {escape(saved_path)}", style="bold green")

    def close(self) -> None:
        """Stop receiving audit events."""
        if pub.isSubscribed(self._on_file_event, self.topic):
            pub.unsubscribe(self._on_file_event, self.topic)
