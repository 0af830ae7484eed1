"""Main application entry point for RecAudit."""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from recaudit import __version__
from recaudit.probe import FFprobeDurationProbe
from recaudit.services.report_generator import ReportGenerator
from recaudit.storage.report_store import ReportStore
from recaudit.ui.report_console import ReportConsole

from .config import RecAuditConfig, AuditPeriod, default_period_end

logger = logging.getLogger(__name__)


class Auditor:

    def __init__(self, config: RecAuditConfig):
        self.config = config
        self.report_console: Optional[ReportConsole] = None

    def init(self, verbose: bool = False):
        logger.info("Initializing services...")

        probe = FFprobeDurationProbe(
            command=self.config.get('probe.command', 'ffprobe'),
            timeout_seconds=self.config.get('probe.timeout_seconds')
        )
        self.report_generator = ReportGenerator(
            probe,
            error_threshold_seconds=int(self.config.get('audit.error_threshold_seconds', 300)),
            extension=self.config.get('audit.extension', '.mp4'),
            fail_fast=bool(self.config.get('audit.fail_fast', False))
        )
        self.report_store = ReportStore(self.config.get_report_directory())
        self.report_console = ReportConsole(topic=self.report_generator.topic, verbose=verbose)

    def run(self, periods: List[AuditPeriod]) -> List[str]:
        """Generate and export one report per period.

        Returns:
            Paths of the saved reports
        """
        saved = []
        try:
            for period in periods:
                report = self.report_generator.generate_report(period.start, period.end, period.directory)
                saved_path = self.report_store.export(report)
                self.report_console.print_summary(report, saved_path)
                saved.append(saved_path)
        finally:
            self.cleanup()
        return saved

    def show(self, start_time: str) -> bool:
        """Print the summary of a stored report."""
        report = self.report_store.load_report(start_time)
        if report is None:
            available = ", ".join(self.report_store.list_reports()) or "none"
            self.report_console.console.print(
                f"No report stored for {start_time} (available: {available})", style="yellow", markup=False)
            return False
        self.report_console.print_summary(report)
        return True

    def cleanup(self):
        if self.report_console:
            self.report_console.close()


def setup_logging(config, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'logs/recaudit.log')
    console_output = config.get('logging.console_output', True)

    # Create logs directory if it doesn't exist
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger = logging.getLogger(__name__)
    logger.info("="*50)
    logger.info("RecAudit starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("="*50)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recaudit",
        description="RecAudit - Daily coverage audit for video recordings",
        epilog="Without --start, every period listed in the configuration file is audited."
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in defaults)"
    )

    parser.add_argument(
        "--directory",
        type=str,
        help="Directory holding the recordings (overrides audit.directory; configured periods "
             "that name their own directory keep it)"
    )

    parser.add_argument(
        "--start",
        type=str,
        help="Audit a single period starting at this timestamp (YYYY-MM-DD HH-MM-SS)"
    )

    parser.add_argument(
        "--end",
        type=str,
        help="End of the --start period (default: one day after --start)"
    )

    parser.add_argument(
        "--threshold",
        type=int,
        help="Recordings shorter than this many seconds are errors (overrides config)"
    )

    parser.add_argument(
        "--report-dir",
        type=str,
        help="Directory for report files (overrides config)"
    )

    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Abort on the first file that cannot be probed or parsed"
    )

    parser.add_argument(
        "--show",
        type=str,
        metavar="START",
        help="Print the summary of a stored report instead of auditing"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print every audited file, not only incomplete ones"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, INFO)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"RecAudit v{__version__}"
    )

    return parser


def apply_overrides(config: RecAuditConfig, args: argparse.Namespace) -> None:
    """Apply command line overrides on top of the loaded configuration."""
    if args.directory:
        config.set('audit.directory', args.directory)
    if args.threshold is not None:
        config.set('audit.error_threshold_seconds', args.threshold)
    if args.report_dir:
        config.set('storage.report_directory', args.report_dir)
    if args.fail_fast:
        config.set('audit.fail_fast', True)


def resolve_periods(config: RecAuditConfig, args: argparse.Namespace) -> List[AuditPeriod]:
    """Get the periods to audit: the --start period, or the configured list."""
    if args.start:
        return [AuditPeriod(
            start=args.start,
            end=args.end or default_period_end(args.start),
            directory=config.get('audit.directory', 'record')
        )]
    return config.get_periods()


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for RecAudit application."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.end and not args.start:
        parser.error("--end requires --start")

    try:
        config = RecAuditConfig(args.config)
        apply_overrides(config, args)
        setup_logging(config, args.log_level or config.get('logging.level', 'INFO'))

        auditor = Auditor(config)
        auditor.init(verbose=args.verbose)

        if args.show:
            found = auditor.show(args.show)
            auditor.cleanup()
            if not found:
                sys.exit(1)
            return

        periods = resolve_periods(config, args)
        if not periods:
            auditor.cleanup()
            print("Nothing to audit: pass --start or list periods in the configuration file")
            return

        auditor.run(periods)
    except KeyboardInterrupt:
        print("\n👋 Interrupted")
        sys.exit(130)
    except Exception as e:
        print(f"❌ Error: {e}")
        logging.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
