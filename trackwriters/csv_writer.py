from __future__ import annotations

import csv
import sys
from typing import Optional, Sequence, TextIO

from .base import RowWriter, WriterIOError


class CsvRowWriter(RowWriter):
    """CSV writer on top of the stdlib `csv` module.

    Minimal quoting with '\\n' row endings: a multi-tag string such as
    `#pbi-123,#pbi-47` is written quoted, plain values are not.
    No header row is emitted.
    """

    def __init__(self, *, target: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
        super().__init__(target=target)
        self._owns_stream = False
        if stream is not None:
            self._stream = stream
        elif target:
            try:
                self._stream = open(target, "w", newline="", encoding="utf-8")
            except OSError as e:
                raise WriterIOError(f"Cannot open output file {target}: {e}") from e
            self._owns_stream = True
        else:
            self._stream = sys.stdout
        self._writer = csv.writer(self._stream, lineterminator="\n")

    def name(self) -> str:
        return "csv"

    def write_fields(self, fields: Sequence[str]) -> None:
        try:
            self._writer.writerow(fields)
        except OSError as e:
            raise WriterIOError(f"Failed writing CSV to {self.target or 'stdout'}: {e}") from e

    def close(self) -> None:
        try:
            self._stream.flush()
        except OSError as e:
            raise WriterIOError(f"Failed flushing CSV to {self.target or 'stdout'}: {e}") from e
        finally:
            if self._owns_stream and not self._stream.closed:
                self._stream.close()
