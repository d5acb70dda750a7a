from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

from timetracker.base import JournalReadError
from timetracker.logging_helper import log_debug, log_warn

DEFAULT_EXTENSIONS = (".md",)


def collect_journal_files(
    directory: Union[str, Path],
    recursive: bool = False,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[Path]:
    """
    Depth-first listing of journal files under directory.

    Entries are visited in name order so the report is reproducible across
    filesystems. Subdirectories are only entered when recursive is set;
    symlinked directories are never followed.
    """
    out: List[Path] = []
    _collect(Path(directory), recursive, tuple(extensions), out)
    return out


def _collect(directory: Path, recursive: bool, extensions: Tuple[str, ...], out: List[Path]) -> None:
    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        if path.is_file() and path.suffix in extensions:
            out.append(path)
        elif recursive and path.is_dir():
            if path.is_symlink():
                log_warn(f"Skipping symlinked directory: {path}")
                continue
            _collect(path, True, extensions, out)


def collect_from_directories(
    directories: Iterable[Union[str, Path]],
    recursive: bool = False,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[Path]:
    files: List[Path] = []
    for d in directories:
        path = Path(d)
        if not path.is_dir():
            log_warn(f"Directory not found, skipping: {path}")
            continue
        try:
            files.extend(collect_journal_files(path, recursive, extensions))
        except OSError as e:
            raise JournalReadError(path, str(e)) from e
    return files


def document_label(path: Path, basename: bool = False) -> str:
    return path.name if basename else str(path)


def load_journal(path: Path, encoding: str = "utf-8") -> str:
    try:
        with open(path, "r", encoding=encoding) as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise JournalReadError(path, str(e)) from e


def iter_documents(
    paths: Iterable[Path],
    *,
    basename: bool = False,
    encoding: str = "utf-8",
) -> Iterator[Tuple[str, str]]:
    """Yield (label, content) one journal at a time; reading stops at the first failure."""
    for path in paths:
        log_debug(f"parsing {path}")
        yield document_label(path, basename), load_journal(path, encoding)
