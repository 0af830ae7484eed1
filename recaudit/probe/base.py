"""Abstract base classes for media duration probes."""

from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class ProbeError(RuntimeError):
    """Raised when a file's duration cannot be determined."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class ProbeUnavailableError(RuntimeError):
    """Raised when the probe tool itself cannot be started."""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(f"cannot run duration probe {command!r}: {message}")


class AbstractDurationProbe(ABC):
    """Abstract base class for duration probes."""

    @abstractmethod
    def get_duration(self, path: str) -> int:
        """Measure the duration of a media file.

        Args:
            path: Path to the media file

        Returns:
            Duration in whole seconds (truncated)

        Raises:
            ProbeError: If the duration of this file cannot be determined
            ProbeUnavailableError: If the probe cannot run at all
        """
        pass
