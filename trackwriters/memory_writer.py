from __future__ import annotations

from typing import List, Optional, Sequence

from .base import RowWriter


class MemoryRowWriter(RowWriter):
    """Keeps rows in a list instead of writing them anywhere.

    Useful for tests and for embedding the tracker in other tools.
    """

    def __init__(self, *, target: Optional[str] = None) -> None:
        super().__init__(target=target)
        self.rows: List[List[str]] = []

    def name(self) -> str:
        return "memory"

    def write_fields(self, fields: Sequence[str]) -> None:
        self.rows.append(list(fields))
