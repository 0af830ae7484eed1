"""Media duration probes."""

from .base import AbstractDurationProbe, ProbeError, ProbeUnavailableError
from .ffprobe import FFprobeDurationProbe

__all__ = [
    'AbstractDurationProbe',
    'ProbeError',
    'ProbeUnavailableError',
    'FFprobeDurationProbe'
]
