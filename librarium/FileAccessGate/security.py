"""
FileAccessGate security module.

Provides path resolution confined to a base directory, traversal
prevention, and extension checking.
"""

import os
import re
from typing import Iterable

from .errors import InvalidPath

_SEPARATORS = re.compile(r"[\\/]+")


def normalize_path(path: str) -> str:
    """
    Normalize a path to an absolute form.

    Args:
        path: Raw path string

    Returns:
        Normalized absolute path
    """
    path = os.path.expanduser(str(path))
    path = os.path.normpath(path)
    path = os.path.abspath(path)
    return path


def split_segments(relative_path: str) -> list:
    """Split a caller path on either separator, dropping empty and '.' parts."""
    return [s for s in _SEPARATORS.split(relative_path or "") if s and s != "."]


def resolve_path(base_path: str, relative_path: str) -> str:
    """
    Resolve a caller-supplied path beneath a base directory.

    Parent-traversal segments are rejected before any normalization.

    Args:
        base_path: Base directory
        relative_path: Path relative to the base directory

    Returns:
        Absolute path inside the base directory

    Raises:
        InvalidPath: If the path contains '..', a NUL byte, or would
            otherwise land outside the base directory
    """
    relative_path = relative_path or ""
    if "\x00" in relative_path:
        raise InvalidPath("Path contains a null byte", relative_path)

    segments = split_segments(relative_path)
    if ".." in segments:
        raise InvalidPath(f"Parent traversal is not allowed: {relative_path}", relative_path)

    base = normalize_path(base_path)
    if not segments:
        return base

    target = os.path.normpath(os.path.join(base, *segments))

    try:
        common = os.path.commonpath([base, target])
    except ValueError:
        # Different drives on Windows
        raise InvalidPath(f"Path is on a different drive: {relative_path}", relative_path)
    if common != base:
        raise InvalidPath(f"Path escapes base directory: {relative_path}", relative_path)

    return target


def to_relative(base_path: str, absolute_path: str) -> str:
    """Express an absolute path under base as a forward-slash relative path."""
    rel = os.path.relpath(absolute_path, normalize_path(base_path))
    if rel == ".":
        return ""
    return rel.replace(os.sep, "/")


def validate_name(name: str, label: str = "name") -> str:
    """
    Validate a single path segment (folder, action or file name).

    Raises:
        InvalidPath: If the name is empty, '.'/'..', or contains a separator
    """
    if not name or name in (".", "..") or _SEPARATORS.search(name) or "\x00" in name:
        raise InvalidPath(f"Invalid {label}: {name!r}", name or "")
    return name


def check_extension_allowed(filename: str, allowed: Iterable[str]) -> bool:
    """
    Check whether a file's extension is in an allow-list.

    Args:
        filename: Filename to check
        allowed: Lower-case extensions including the dot

    Returns:
        True if the extension is listed
    """
    _, ext = os.path.splitext(filename)
    return bool(ext) and ext.lower() in {e.lower() for e in allowed}
