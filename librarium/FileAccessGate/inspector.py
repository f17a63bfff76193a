"""
FileAccessGate tree inspection.

Directory listings with recursive size totals and immediate item counts.
Nothing is cached; every call re-reads the filesystem.

Symlinked directories are followed and cycles are not detected, so a
symlink loop inside the base directory makes size calculation run until
the OS refuses to open the path.
"""

import os
from datetime import datetime
from typing import List

from librarium.shared.gate import GateLogger

from .errors import IOFailure, NotFound
from .models import DirectoryEntry
from .security import resolve_path, to_relative

_log = GateLogger.get("FileAccessGate")


def calculate_directory_size(path: str) -> int:
    """
    Sum the sizes of every file beneath a directory.

    Entries that are neither files nor directories, such as dangling
    symlinks, contribute nothing.

    Args:
        path: Absolute directory path

    Returns:
        Total size in bytes (0 for an empty directory)
    """
    total = 0
    stack = [path]
    while stack:
        current = stack.pop()
        with os.scandir(current) as entries:
            for entry in entries:
                if entry.is_dir():
                    stack.append(entry.path)
                elif entry.is_file():
                    try:
                        total += entry.stat().st_size
                    except FileNotFoundError:
                        continue
    return total


def count_items(path: str) -> int:
    """Count the immediate children of a directory."""
    with os.scandir(path) as entries:
        return sum(1 for _ in entries)


def _build_entry(base_path: str, entry: os.DirEntry, stat: os.stat_result) -> DirectoryEntry:
    rel_path = to_relative(base_path, entry.path)

    if entry.is_dir():
        return DirectoryEntry(
            name=entry.name,
            relative_path=rel_path,
            is_directory=True,
            size=calculate_directory_size(entry.path),
            modified=datetime.fromtimestamp(stat.st_mtime),
            item_count=count_items(entry.path),
        )

    return DirectoryEntry(
        name=entry.name,
        relative_path=rel_path,
        is_directory=False,
        size=stat.st_size,
        modified=datetime.fromtimestamp(stat.st_mtime),
        download_ref=rel_path,
    )


def list_directory(base_path: str, relative_path: str = "") -> List[DirectoryEntry]:
    """
    List one directory level.

    Directories come first, then files; each group is ordered by
    modification time, most recent first.

    Args:
        base_path: Base directory
        relative_path: Directory relative to the base ("" = root)

    Returns:
        List of DirectoryEntry

    Raises:
        InvalidPath: If the path escapes the base directory
        NotFound: If the target does not exist or is not a directory
        IOFailure: If the directory cannot be read
    """
    resolved = resolve_path(base_path, relative_path)
    if not os.path.isdir(resolved):
        raise NotFound(f"Directory not found: {relative_path or '/'}", relative_path)

    result: List[DirectoryEntry] = []
    try:
        with os.scandir(resolved) as entries:
            for entry in entries:
                try:
                    stat = entry.stat()
                except FileNotFoundError:
                    # Removed since scandir, or a dangling symlink
                    _log.debug(f"Skipping unreadable entry: {entry.path}")
                    continue
                result.append(_build_entry(base_path, entry, stat))
    except OSError as e:
        raise IOFailure(f"Failed to list directory: {e}", relative_path) from e

    result.sort(key=lambda e: (not e.is_directory, -e.modified.timestamp()))
    return result
