"""Report row writer package.

Exposes the base writer types for external imports.
"""

from .base import (
    RowWriter,
    WriterError,
    WriterConfigError,
    WriterIOError,
)
from .factory import create_row_writer

__all__ = [
    "RowWriter",
    "WriterError",
    "WriterConfigError",
    "WriterIOError",
    "create_row_writer",
]
