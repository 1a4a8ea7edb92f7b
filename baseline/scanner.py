"""Workspace scan for ``TODO(baseline/<id>)`` markers."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Iterator, Sequence
import logging
import os
from pathlib import Path

import pathspec

from .constants import DEFAULT_IGNORE_FILE, MAX_CONCURRENT_READS
from .exceptions import ConfigurationError, FileReadError
from .matcher import find_todo_feature_id
from .model import TodoEntry
from .util.text import split_lines

LOGGER = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative cancellation flag checked between file reads."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def normalize_extensions(values: Iterable[str] | None) -> tuple[str, ...]:
    """Strip dots and whitespace, lowercase, and drop empty or repeated entries."""
    if not values:
        return ()
    output: list[str] = []
    seen: set[str] = set()
    for value in values:
        extension = value.strip().lstrip(".").strip().lower()
        if not extension or extension in seen:
            continue
        seen.add(extension)
        output.append(extension)
    return tuple(output)


def has_allowed_extension(path: Path, extensions: Sequence[str]) -> bool:
    suffix = path.suffix
    return bool(suffix) and suffix[1:].lower() in extensions


def load_ignore_spec(
    root: Path, ignore_file: str = DEFAULT_IGNORE_FILE
) -> pathspec.PathSpec | None:
    """Build an exclude filter from the root's ignore file, if it has one."""
    try:
        lines = (root / ignore_file).read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return None
    patterns = [line.strip() for line in lines if line.strip()]
    if not patterns:
        return None
    return pathspec.GitIgnoreSpec.from_lines(patterns)


def iter_candidate_files(
    root: Path, extensions: Sequence[str], spec: pathspec.PathSpec | None
) -> Iterator[Path]:
    """Yield files under root with an allowed extension that the ignore patterns keep."""
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root)
        dirnames.sort()
        if spec is not None:
            dirnames[:] = [
                name for name in dirnames if not spec.match_file(f"{(rel_dir / name).as_posix()}/")
            ]
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if not has_allowed_extension(path, extensions):
                continue
            if spec is not None and spec.match_file((rel_dir / name).as_posix()):
                continue
            yield path


def read_lines(path: Path) -> list[str]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise FileReadError(str(path), cause=exc.__class__.__name__) from exc
    return split_lines(text)


def extract_todos(path: Path, lines: Iterable[str]) -> list[TodoEntry]:
    entries: list[TodoEntry] = []
    for line_number, line_text in enumerate(lines, start=1):
        feature_id = find_todo_feature_id(line_text)
        if feature_id is None:
            continue
        entries.append(
            TodoEntry(
                feature_id=feature_id,
                file_name=path.name,
                file_path=str(path),
                line_number=line_number,
            )
        )
    return entries


def _list_files(root: Path, extensions: Sequence[str], ignore_file: str) -> list[Path]:
    spec = load_ignore_spec(root, ignore_file)
    return list(iter_candidate_files(root, extensions, spec))


async def _scan_file(
    path: Path,
    extensions: Sequence[str],
    semaphore: asyncio.Semaphore,
    token: CancellationToken,
) -> list[TodoEntry]:
    if token.cancelled or not has_allowed_extension(path, extensions):
        return []
    async with semaphore:
        if token.cancelled:
            return []
        try:
            lines = await asyncio.to_thread(read_lines, path)
        except FileReadError as exc:
            LOGGER.debug("Skipping file: %s", exc)
            return []
    if token.cancelled:
        return []
    return extract_todos(path, lines)


async def scan_workspace(
    roots: Iterable[str | Path],
    extensions: Iterable[str] | None,
    *,
    ignore_file: str = DEFAULT_IGNORE_FILE,
    token: CancellationToken | None = None,
    into: list[TodoEntry] | None = None,
    max_concurrency: int = MAX_CONCURRENT_READS,
) -> list[TodoEntry]:
    """Collect TODO markers under every root, in root, file and line order.

    Files that cannot be read are skipped. Once the token is cancelled, reads in
    flight are discarded and no new reads start; entries from files that
    finished earlier are returned.
    """
    allowed = normalize_extensions(extensions)
    if not allowed:
        raise ConfigurationError(
            "No file extensions configured for the TODO scan. "
            "Pass --ext or set PYBASELINE_EXTENSIONS."
        )

    token = token if token is not None else CancellationToken()
    results = into if into is not None else []
    semaphore = asyncio.Semaphore(max(max_concurrency, 1))

    for root in roots:
        if token.cancelled:
            break
        root_path = Path(root).resolve()
        files = await asyncio.to_thread(_list_files, root_path, allowed, ignore_file)
        LOGGER.debug("Scanning %d files under %s", len(files), root_path)
        per_file = await asyncio.gather(
            *(_scan_file(path, allowed, semaphore, token) for path in files)
        )
        for entries in per_file:
            results.extend(entries)

    if token.cancelled:
        LOGGER.debug("TODO scan canceled after %d entries", len(results))
    return results
