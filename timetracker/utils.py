from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from timetracker.base import AccumulationBucket, Duration, ReportRow, TimeEntry
from timetracker.logging_helper import log_debug, log_trace

HOURS_PER_DAY = 8
CONTEXT_TAG_PREFIX = "#pbi-"
EMPTY_TAGS = ""

DURATION_RE = re.compile(r"(?P<value>\d+)(?P<unit>[hmsd])", re.IGNORECASE)
TAG_RE = re.compile(r"#[A-Za-z0-9_-]+")
WORK_ITEM_HEADING_RE = re.compile(r"^#+\s+Work on \[\[(\d+)\]\]", re.IGNORECASE)
GENERIC_HEADING_RE = re.compile(r"^#+\s+")
TIME_TRACKED_RE = re.compile(
    r"(?P<text>.*?)(?:\[\s*timeTracked\s*:\s*(?P<duration>[^\]]+)\])(?P<tags>.*)"
)

# -----------------------
# Durations
# -----------------------

def parse_duration(text: str, hours_per_day: int = HOURS_PER_DAY) -> Duration:
    """
    Sum every `<digits><unit>` token in text into a Duration (unit: h, m, s, d).
    Days count as `hours_per_day` hours. Anything else in the text is ignored.
    """
    duration = Duration()
    for m in DURATION_RE.finditer(text or ""):
        value = int(m.group("value"))
        unit = m.group("unit").lower()
        if unit == "h":
            duration.hours += value
        elif unit == "m":
            duration.minutes += value
        elif unit == "s":
            duration.seconds += value
        elif unit == "d":
            duration.hours += value * hours_per_day
    return duration


def format_duration(duration: Duration) -> str:
    parts = []
    if duration.hours > 0:
        parts.append(f"{duration.hours}h")
    if duration.minutes > 0:
        parts.append(f"{duration.minutes}m")
    if duration.seconds > 0:
        parts.append(f"{duration.seconds}s")
    return "".join(parts)

# -----------------------
# Tags
# -----------------------

def extract_tags(text: str, context_tag: Optional[str], sort_tags: bool) -> str:
    """
    Collect #tags from text (in order, duplicates kept), put the context tag in
    front unless it is already literally present, optionally sort, join by ','.
    An empty result is the empty string.
    """
    tags: List[str] = TAG_RE.findall(text or "")
    if context_tag and context_tag not in tags:
        tags.insert(0, context_tag)
    if sort_tags:
        tags.sort()
    if not tags:
        return EMPTY_TAGS
    return ",".join(tags)

# -----------------------
# Line scanning
# -----------------------

def scan_line(
    line: str,
    context_tag: Optional[str],
    sort_tags: bool = True,
    hours_per_day: int = HOURS_PER_DAY,
) -> Tuple[Optional[str], Optional[TimeEntry]]:
    """
    Apply one line to the scan state. Returns (new_context_tag, entry_or_None).

    Headings are checked first: `# Work on [[N]]` sets the context to `#pbi-N`,
    any other heading clears it. Neither produces an entry. An annotation line
    keeps the context and yields exactly one entry.
    """
    m = WORK_ITEM_HEADING_RE.match(line)
    if m:
        return f"{CONTEXT_TAG_PREFIX}{m.group(1)}", None
    if GENERIC_HEADING_RE.match(line):
        return None, None

    m = TIME_TRACKED_RE.search(line)
    if not m:
        return context_tag, None
    task_text = m.group("text") or ""
    duration_text = m.group("duration") or ""
    tags_text = m.group("tags") or ""
    combined = f"{task_text} {tags_text}".strip()
    tags = extract_tags(combined, context_tag, sort_tags)
    duration = parse_duration(duration_text, hours_per_day)
    log_debug(f"Parsed duration: {format_duration(duration)} from text: {duration_text}")
    return context_tag, TimeEntry(tags=tags, duration=duration)


def parse_time_entries(
    content: str,
    sort_tags: bool = True,
    hours_per_day: int = HOURS_PER_DAY,
) -> List[TimeEntry]:
    """Scan a whole document; the work-item context starts empty for every call."""
    entries: List[TimeEntry] = []
    context_tag: Optional[str] = None
    for line in (content or "").splitlines():
        log_trace(f"Processing line: {line}")
        new_context, entry = scan_line(line, context_tag, sort_tags, hours_per_day)
        if new_context != context_tag:
            if new_context:
                log_debug(f"Found work item: {new_context}")
            else:
                log_debug("Resetting current work item due to heading")
        context_tag = new_context
        if entry is not None:
            entries.append(entry)
    return entries

# -----------------------
# Accumulation + report rows
# -----------------------

def accumulate_entries(
    sourced_entries: Iterable[Tuple[str, TimeEntry]],
    order: str = "first_seen",
) -> Dict[str, AccumulationBucket]:
    """
    Sum durations per tag string, component by component (no carrying between
    units), and record each contributing source in processing order. A source
    that contributes the same tag twice is listed twice.

    Buckets come back in first-seen order of their tag string, or sorted by tag
    string when order="tags".
    """
    if order not in ("first_seen", "tags"):
        raise ValueError(f"Unknown accumulation order '{order}' (expected first_seen|tags)")
    buckets: Dict[str, AccumulationBucket] = {}
    for source, entry in sourced_entries:
        bucket = buckets.get(entry.tags)
        if bucket is None:
            bucket = AccumulationBucket()
            buckets[entry.tags] = bucket
        bucket.duration.add(entry.duration)
        bucket.sources.append(source)
    if order == "tags":
        return {tag: buckets[tag] for tag in sorted(buckets)}
    return buckets


def _sourced_entries(
    documents: Iterable[Tuple[str, str]],
    sort_tags: bool,
    hours_per_day: int,
) -> Iterator[Tuple[str, TimeEntry]]:
    for label, content in documents:
        for entry in parse_time_entries(content, sort_tags=sort_tags, hours_per_day=hours_per_day):
            yield label, entry


def build_report_rows(
    documents: Iterable[Tuple[str, str]],
    *,
    sort_tags: bool = True,
    accumulate: bool = False,
    hours_per_day: int = HOURS_PER_DAY,
    order: str = "first_seen",
) -> List[ReportRow]:
    """
    Turn (label, content) documents into output rows.

    Per-entry mode: one row per annotation, labelled with its document.
    Accumulate mode: one row per tag string, sources joined by ','.
    """
    sourced = _sourced_entries(documents, sort_tags, hours_per_day)
    if not accumulate:
        return [
            ReportRow(entry.tags, format_duration(entry.duration), label)
            for label, entry in sourced
        ]
    buckets = accumulate_entries(sourced, order=order)
    return [
        ReportRow(tags, format_duration(bucket.duration), ",".join(bucket.sources))
        for tags, bucket in buckets.items()
    ]
