from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

from timetracker.base import ReportRow


class WriterError(Exception):
    """Base error for report writers."""


class WriterConfigError(WriterError):
    """Unknown output format or inconsistent output settings."""


class WriterIOError(WriterError):
    """The output target could not be opened or written."""


class RowWriter(ABC):
    """Unified interface for report sinks.

    Writers receive raw 3-column rows (tags, duration, source) and own every
    encoding concern, quoting included. The core never escapes values itself.

    Implementors should:
    - Accept rows in the order given and emit them in that order.
    - Wrap I/O failures as WriterIOError.
    - Release any opened target in close(); close() must be safe to call twice.
    """

    def __init__(self, *, target: Optional[str] = None) -> None:
        self._target = target

    @property
    def target(self) -> Optional[str]:
        return self._target

    @abstractmethod
    def name(self) -> str:
        """Short format name (e.g., 'csv', 'memory')."""

    @abstractmethod
    def write_fields(self, fields: Sequence[str]) -> None:
        """Write one row of already-stringified fields."""

    def write_row(self, row: ReportRow) -> None:
        self.write_fields(row.as_list())

    def write_rows(self, rows: Iterable[ReportRow]) -> int:
        count = 0
        for row in rows:
            self.write_row(row)
            count += 1
        return count

    def close(self) -> None:
        return None

    def __enter__(self) -> "RowWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
