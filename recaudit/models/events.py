"""Event models for pub/sub audit progress reporting."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FileAuditEvent:
    """Outcome of auditing a single recording file."""
    filename: str
    status: str  # "recorded", "error", "unprocessable"
    sequence_number: int
    total_files: int
    duration: Optional[int] = None
    reason: Optional[str] = None
