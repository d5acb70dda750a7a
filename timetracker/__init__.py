"""Markdown journal time tracking.

Exposes the scanning/aggregation core for external imports.
"""

from .base import (
    AccumulationBucket,
    Duration,
    JournalReadError,
    ReportRow,
    TimeEntry,
    TimeTrackerError,
)
from .utils import (
    accumulate_entries,
    build_report_rows,
    extract_tags,
    format_duration,
    parse_duration,
    parse_time_entries,
    scan_line,
)

__version__ = "1.0.0"

__all__ = [
    "AccumulationBucket",
    "Duration",
    "JournalReadError",
    "ReportRow",
    "TimeEntry",
    "TimeTrackerError",
    "accumulate_entries",
    "build_report_rows",
    "extract_tags",
    "format_duration",
    "parse_duration",
    "parse_time_entries",
    "scan_line",
]
