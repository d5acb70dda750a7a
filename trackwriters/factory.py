from __future__ import annotations

from typing import Dict, Optional, Tuple

from .base import RowWriter, WriterConfigError


def _effective_format_and_target(
    cfg: Dict,
    output_override: Optional[str],
) -> Tuple[str, Optional[str]]:
    """Resolve writer format and target path from the `output` config section.

    The CLI output path wins over config; a missing/null path means stdout.
    """
    out_section = cfg.get("output", {}) if isinstance(cfg.get("output"), dict) else {}
    fmt = str(out_section.get("format") or "csv").strip().lower()
    target = output_override or out_section.get("path") or None
    return fmt, (str(target) if target else None)


def create_row_writer(
    cfg: Dict,
    *,
    output_override: Optional[str] = None,
) -> RowWriter:
    """Factory returning a RowWriter for the configured output format."""
    fmt, target = _effective_format_and_target(cfg, output_override)

    if fmt == "csv":
        from .csv_writer import CsvRowWriter
        writer: RowWriter = CsvRowWriter(target=target)
    elif fmt == "memory":
        from .memory_writer import MemoryRowWriter
        writer = MemoryRowWriter(target=target)
    else:
        raise WriterConfigError(f"Unknown output format '{fmt}'. Implement a writer and register it in the factory.")
    return writer
