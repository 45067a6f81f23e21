import asyncio
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import structlog

from claudeburst.jsonl_parser import parse_entries
from claudeburst.models import UsageEntry, UsageWindow
from claudeburst.timeutil import ensure_aware, utcnow
from claudeburst.window_builder import LOOKBACK_DURATION, calculate_current_window

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class ScanResult:
    """
    ScanResult is the outcome of one pass over the
    Claude projects directory.
    """

    window: "UsageWindow | None"
    files_scanned: "int" = 0
    entries_parsed: "int" = 0
    # False when the projects directory does not exist
    data_found: "bool" = True


def default_claude_dir() -> "Path":
    return Path.home() / ".claude"


def projects_directory(claude_dir: "Path | None" = None) -> "Path | None":
    """
    returns <claude_dir>/projects if it exists, None otherwise.
    """
    projects_dir = (claude_dir or default_claude_dir()) / "projects"
    if projects_dir.is_dir():
        return projects_dir
    return None


def _is_hidden(path: "Path", root: "Path") -> "bool":
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def find_jsonl_files(directory: "Path", since: "datetime") -> "list[Path]":
    """
    recursively finds *.jsonl files modified at or after `since`,
    skipping hidden files and directories.
    """
    if not directory.is_dir():
        return []

    cutoff = ensure_aware(since).timestamp()
    files: "list[Path]" = []

    for path in directory.rglob("*.jsonl"):
        if _is_hidden(path, directory):
            continue
        try:
            stat = path.stat()
        except OSError as e:
            # files can vanish between listing and stat
            logger.debug("jsonl_stat_failed", path=str(path), error=str(e))
            continue
        if stat.st_mtime >= cutoff:
            files.append(path)

    return sorted(files)


def load_entries(paths: "list[Path]") -> "list[UsageEntry]":
    entries: "list[UsageEntry]" = []
    for path in paths:
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.debug("jsonl_read_failed", path=str(path), error=str(e))
            continue
        entries.extend(parse_entries(data))
    return entries


def load_current_window(
    projects_dir: "Path | None" = None,
    now: "datetime | None" = None,
) -> "ScanResult":
    """
    reads the logs touched within LOOKBACK_DURATION and computes the
    current window from them.
    """
    if projects_dir is None:
        projects_dir = projects_directory()
    if projects_dir is None or not projects_dir.is_dir():
        return ScanResult(window=None, data_found=False)

    now = utcnow() if now is None else ensure_aware(now)
    files = find_jsonl_files(projects_dir, now - LOOKBACK_DURATION)
    entries = load_entries(files)
    window = calculate_current_window(entries, now)

    logger.debug(
        "usage_scan_done",
        files=len(files),
        entries=len(entries),
        window_end=window.end.isoformat() if window else None,
    )
    return ScanResult(
        window=window,
        files_scanned=len(files),
        entries_parsed=len(entries),
    )


async def load_current_window_async(
    projects_dir: "Path | None" = None,
    now: "datetime | None" = None,
) -> "ScanResult":
    """
    runs load_current_window in a worker thread so file I/O does not
    block the event loop.
    """
    return await asyncio.to_thread(load_current_window, projects_dir, now)
