"""Simple YAML configuration loader for RecAudit."""

import copy
import os
import yaml
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, Any, Optional, List
import logging

from ..models.report import REPORT_TIME_FORMAT

logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    'audit': {
        'directory': 'record',
        'error_threshold_seconds': 300,
        'extension': '.mp4',
        'fail_fast': False,
    },
    'probe': {
        'command': 'ffprobe',
        'timeout_seconds': None,
    },
    'storage': {
        'report_directory': 'report',
    },
    'logging': {
        'level': 'INFO',
        'file_path': 'logs/recaudit.log',
        'console_output': True,
    },
    'periods': [],
}


@dataclass(frozen=True)
class AuditPeriod:
    """One coverage period to audit."""
    start: str
    end: str
    directory: str


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class RecAuditConfig:
    """RecAudit configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, built-in defaults are used.
        """
        self.config_file = Path(config_path) if config_path else None

        if self.config_file is None:
            logger.info("No configuration file given, using defaults")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            return

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not loaded:
            raise ValueError("Configuration file is empty")
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")

        config = _merge(DEFAULT_CONFIG, loaded)

        # Resolve relative paths
        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        def resolve(path: str) -> str:
            if os.path.isabs(path):
                return path
            return str(config_dir / path)

        config['audit']['directory'] = resolve(config['audit']['directory'])
        config['storage']['report_directory'] = resolve(config['storage']['report_directory'])
        config['logging']['file_path'] = resolve(config['logging']['file_path'])

        for period in config.get('periods') or []:
            if isinstance(period, dict) and period.get('directory'):
                period['directory'] = resolve(period['directory'])

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'audit.extension').

        Args:
            key_path: Dot-separated key path (e.g., 'storage.report_directory')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value (e.g., 'audit.fail_fast')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        # Navigate to the parent dictionary
        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")

    def get_periods(self) -> List[AuditPeriod]:
        """Get the configured audit periods.

        Periods without an end run for one day from their start; periods
        without a directory use audit.directory.

        Returns:
            List of AuditPeriod in configured order
        """
        periods = []
        default_directory = self.get('audit.directory', 'record')

        for index, entry in enumerate(self.get('periods') or []):
            if not isinstance(entry, dict) or not entry.get('start'):
                raise ValueError(f"Period #{index + 1} must be a mapping with a 'start' timestamp")

            start = str(entry['start'])
            end = entry.get('end')
            periods.append(AuditPeriod(
                start=start,
                end=str(end) if end else default_period_end(start),
                directory=str(entry.get('directory') or default_directory)
            ))

        return periods

    def get_report_directory(self) -> str:
        """Get report output directory path."""
        return self.get('storage.report_directory', 'report')


def default_period_end(start: str) -> str:
    """Get the end timestamp one day after a period start.

    Args:
        start: Period start in YYYY-MM-DD HH-MM-SS format

    Returns:
        End timestamp in the same format
    """
    try:
        start_time = datetime.strptime(start, REPORT_TIME_FORMAT)
    except ValueError:
        raise ValueError(f"Invalid period start '{start}', expected YYYY-MM-DD HH-MM-SS")
    return (start_time + timedelta(days=1)).strftime(REPORT_TIME_FORMAT)
