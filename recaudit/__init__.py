"""RecAudit - daily coverage audit for video recordings."""

__version__ = "0.1.0"
