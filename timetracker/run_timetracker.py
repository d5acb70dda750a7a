#!/usr/bin/env python3
from __future__ import annotations

import argparse
import codecs
import sys
from typing import Dict, List, Optional

import yaml

from timetracker.base import TimeTrackerError
from timetracker.config_loader import load_effective_config, resolve_local_config, section
from timetracker.journal_io import collect_from_directories, iter_documents
from timetracker.logging_helper import (
    log_debug,
    log_error,
    log_info,
    log_warn,
    log_trace_block,
    set_log_level,
)
from timetracker.utils import build_report_rows
from trackwriters import RowWriter, WriterError, create_row_writer

VERBOSITY_CHOICES = ["error", "warn", "info", "debug", "trace"]


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="timetracker",
        description=(
            "Parse Markdown journals for [timeTracked: ...] annotations and report "
            "durations per tag as CSV. Config defaults can be overridden with "
            "./timetracker.yaml or --config FILE; flags override both."
        ),
    )
    ap.add_argument("-d", "--dir", dest="directories", action="append", default=None, help="Directory to search (repeatable)")
    ap.add_argument("-r", "--recursive", action="store_true", default=None, help="Recurse into subdirectories")
    ap.add_argument("-v", "--verbosity", choices=VERBOSITY_CHOICES, default=None, help="Set log verbosity level")
    ap.add_argument("-o", "--output", default=None, metavar="FILE", help="Output CSV file (default: stdout)")
    ap.add_argument("--basename", action="store_true", default=None, help="Print only the basename of the file path")
    ap.add_argument("-a", "--accumulate", action="store_true", default=None, help="Accumulate timeTracked values associated with tags")
    ap.add_argument("--unsorted-tags", dest="sort_tags", action="store_false", default=None, help="Keep tags in order of appearance (context tag first)")
    ap.add_argument("--config", default=None, metavar="FILE", help="Local YAML config overriding the defaults")
    return ap


def _effective_settings(cfg: Dict, args: argparse.Namespace) -> Dict:
    journal = section(cfg, "journal")
    scan = section(cfg, "scan")
    output = section(cfg, "output")

    def pick(cli_value, cfg_value):
        return cfg_value if cli_value is None else cli_value

    directories = args.directories or list(journal.get("directories") or [])
    extensions = journal.get("extensions") or [".md"]
    if isinstance(extensions, str):
        extensions = [extensions]
    encoding = str(journal.get("encoding") or "utf-8")
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise ValueError(f"Unknown journal.encoding '{encoding}'")
    raw_hours = scan.get("hours_per_day", 8)
    try:
        if isinstance(raw_hours, bool):
            raise TypeError(raw_hours)
        hours_per_day = int(raw_hours)
    except (TypeError, ValueError):
        raise ValueError(f"scan.hours_per_day must be an integer, got {raw_hours!r}")
    if hours_per_day < 0:
        raise ValueError(f"scan.hours_per_day must not be negative, got {hours_per_day}")
    order = str(output.get("order") or "first_seen").strip().lower()
    if order not in ("first_seen", "tags"):
        raise ValueError(f"Unknown output.order '{order}' (expected first_seen|tags)")

    return {
        "directories": [str(d) for d in directories],
        "recursive": bool(pick(args.recursive, journal.get("recursive", False))),
        "extensions": [str(e) for e in extensions],
        "encoding": encoding,
        "sort_tags": bool(pick(args.sort_tags, scan.get("sort_tags", True))),
        "hours_per_day": hours_per_day,
        "basename": bool(pick(args.basename, output.get("basename", False))),
        "accumulate": bool(pick(args.accumulate, output.get("accumulate", False))),
        "order": order,
    }


def run(settings: Dict, writer: RowWriter) -> int:
    """Collect journals, build report rows and hand them to writer. Returns row count."""
    paths = collect_from_directories(
        settings["directories"],
        recursive=settings["recursive"],
        extensions=settings["extensions"],
    )
    log_info(f"Found {len(paths)} journal file(s)")
    documents = iter_documents(paths, basename=settings["basename"], encoding=settings["encoding"])
    rows = build_report_rows(
        documents,
        sort_tags=settings["sort_tags"],
        accumulate=settings["accumulate"],
        hours_per_day=settings["hours_per_day"],
        order=settings["order"],
    )
    return writer.write_rows(rows)


def main(argv: Optional[List[str]] = None) -> int:
    ap = _parser()
    args = ap.parse_args(argv)

    try:
        local_path = resolve_local_config(args.config)
        cfg, has_local = load_effective_config(local_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        log_error(f"Failed to load config: {e}")
        return 1

    level = args.verbosity or section(cfg, "logging").get("level") or "error"
    set_log_level(level)
    if has_local:
        log_debug(f"Using local config: {local_path}")
    log_trace_block("Effective config", yaml.safe_dump(cfg, sort_keys=True, default_flow_style=False))

    try:
        settings = _effective_settings(cfg, args)
    except ValueError as e:
        log_error(f"Invalid config: {e}")
        return 1
    if not settings["directories"]:
        ap.error("at least one -d/--dir is required (or set journal.directories in config)")
    log_debug(
        f"Settings -> dirs={settings['directories']}, recursive={settings['recursive']}, "
        f"sort_tags={settings['sort_tags']}, accumulate={settings['accumulate']}, basename={settings['basename']}"
    )

    try:
        with create_row_writer(cfg, output_override=args.output) as writer:
            if writer.name() == "memory":
                log_warn("output.format is 'memory': rows are kept in memory and not written anywhere")
            count = run(settings, writer)
    except TimeTrackerError as e:
        log_error(str(e))
        return 1
    except WriterError as e:
        log_error(f"Output failed: {e}")
        return 1

    log_info(f"Wrote {count} row(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
