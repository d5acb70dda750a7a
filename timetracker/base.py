from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union


class TimeTrackerError(Exception):
    """Base error for journal time tracking."""


class JournalReadError(TimeTrackerError):
    """A journal document could not be read (missing, permissions, bad encoding).

    Fatal for the run: skipping the document would under-report tracked time.
    """

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        self.path = Path(path)
        self.reason = reason
        msg = f"Failed to read journal {self.path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


@dataclass
class Duration:
    """Hours/minutes/seconds counters, never normalized.

    90 minutes stays ``minutes=90``; accumulation adds each component on its own.
    """

    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def add(self, other: "Duration") -> None:
        self.hours += other.hours
        self.minutes += other.minutes
        self.seconds += other.seconds


@dataclass(frozen=True)
class TimeEntry:
    """One matched annotation line: the joined tag string and its duration."""

    tags: str
    duration: Duration


@dataclass
class AccumulationBucket:
    duration: Duration = field(default_factory=Duration)
    sources: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReportRow:
    """Raw output columns; quoting is left to the writer."""

    tags: str
    duration: str
    source: str

    def as_list(self) -> List[str]:
        return [self.tags, self.duration, self.source]
