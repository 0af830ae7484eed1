"""Duration probe backed by the ffprobe command line tool."""

import logging
import math
import subprocess
from typing import List, Optional

from .base import AbstractDurationProbe, ProbeError, ProbeUnavailableError

logger = logging.getLogger(__name__)


class FFprobeDurationProbe(AbstractDurationProbe):
    """Reads the container duration of a media file through ffprobe."""

    def __init__(self, command: str = "ffprobe", timeout_seconds: Optional[float] = None):
        """Initialize ffprobe probe.

        Args:
            command: ffprobe executable name or path
            timeout_seconds: Per-file timeout, None waits forever
        """
        self.command = command
        self.timeout_seconds = timeout_seconds
        logger.info(f"FFprobeDurationProbe initialized (command={command}, timeout={timeout_seconds})")

    def build_command(self, path: str) -> List[str]:
        return [
            self.command,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            path,
        ]

    def get_duration(self, path: str) -> int:
        """Run ffprobe on a file and return its duration in seconds."""
        try:
            completed = subprocess.run(
                self.build_command(path),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            raise ProbeError(path, f"probe timed out after {self.timeout_seconds}s")
        except OSError as e:
            raise ProbeUnavailableError(self.command, str(e))

        output = (completed.stdout or "").strip()
        if completed.returncode != 0:
            raise ProbeError(path, f"probe exited with status {completed.returncode}: {output}")

        # ffprobe prints nothing for containers without a duration
        if not output:
            logger.debug(f"No duration reported for {path}, assuming 0s")
            return 0

        return parse_duration(path, output)


def parse_duration(path: str, output: str) -> int:
    """Parse ffprobe output into whole seconds.

    Args:
        path: File the output belongs to (for error messages)
        output: Trimmed probe output

    Returns:
        Duration truncated to an integer
    """
    try:
        seconds = float(output)
    except ValueError:
        raise ProbeError(path, f"unparsable duration output: {output!r}")

    if not math.isfinite(seconds):
        raise ProbeError(path, f"invalid duration value: {output!r}")

    return int(seconds)
