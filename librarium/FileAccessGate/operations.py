"""
FileAccessGate file operations.

Text preview, atomic text writes, and deletion of files or directory trees.
"""

import os
import shutil
import stat
import tempfile
from typing import Iterable

from librarium.shared.gate import GateLogger

from .errors import FileAccessError, InvalidPath, IOFailure, NotFound, UnsupportedContentType
from .models import DeleteFailure, DeleteOutcome
from .security import check_extension_allowed, normalize_path, resolve_path

_log = GateLogger.get("FileAccessGate")

# Process umask, read once; os.umask can only be queried by setting it
_UMASK = os.umask(0)
os.umask(_UMASK)


def _file_mode(path: str) -> int:
    """Permission bits for a file written at path: the current ones, or the umask default."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        return 0o666 & ~_UMASK


def read_file(base_path: str, relative_path: str, encoding: str = "utf-8") -> str:
    """
    Read a whole text file.

    Raises:
        InvalidPath: If the path escapes the base directory
        NotFound: If the path does not exist or is a directory
        IOFailure: If the file cannot be read or decoded
    """
    resolved = resolve_path(base_path, relative_path)
    if not os.path.isfile(resolved):
        raise NotFound(f"File not found: {relative_path}", relative_path)
    try:
        with open(resolved, "r", encoding=encoding, newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(f"Failed to read file: {e}", relative_path) from e


def read_text(
    base_path: str,
    relative_path: str,
    allowed_extensions: Iterable[str],
    encoding: str = "utf-8",
) -> str:
    """
    Read a text file for preview.

    Args:
        base_path: Base directory
        relative_path: File relative to the base
        allowed_extensions: Extensions that may be previewed
        encoding: Text encoding

    Returns:
        File contents

    Raises:
        InvalidPath: If the path escapes the base directory
        NotFound: If the file does not exist
        UnsupportedContentType: If the target is a directory, its extension
            is not allowed, or it does not decode as text
        IOFailure: If the file cannot be read
    """
    resolved = resolve_path(base_path, relative_path)

    if os.path.isdir(resolved):
        raise UnsupportedContentType("Cannot preview a directory", relative_path)
    if not os.path.exists(resolved):
        raise NotFound(f"File not found: {relative_path}", relative_path)
    if not check_extension_allowed(resolved, allowed_extensions):
        _, ext = os.path.splitext(resolved)
        raise UnsupportedContentType(
            f"Preview not supported for '{ext or 'no extension'}' files", relative_path
        )

    try:
        with open(resolved, "r", encoding=encoding, newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise UnsupportedContentType(
            f"Cannot decode file with {encoding} encoding", relative_path
        ) from e
    except OSError as e:
        raise IOFailure(f"Failed to read file: {e}", relative_path) from e


def write_text(
    base_path: str,
    relative_path: str,
    content: str,
    encoding: str = "utf-8",
) -> str:
    """
    Replace a file's contents atomically, creating parent directories.

    Content goes to a temporary file in the target directory which is then
    renamed over the target, so readers see either the old or the new file.

    Returns:
        Absolute path written

    Raises:
        InvalidPath: If the path escapes or names the base directory
        NotFound: If the target is an existing directory
        IOFailure: If writing fails
    """
    resolved = resolve_path(base_path, relative_path)
    if resolved == normalize_path(base_path):
        raise InvalidPath("Cannot write to the base directory", relative_path)
    if os.path.isdir(resolved):
        raise NotFound(f"Path is a directory, not a file: {relative_path}", relative_path)

    parent = os.path.dirname(resolved)
    tmp_path = None
    try:
        mode = _file_mode(resolved)
        os.makedirs(parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=parent, prefix=f".{os.path.basename(resolved)}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(content)
        # mkstemp creates files as 0600
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, resolved)
        tmp_path = None
    except OSError as e:
        raise IOFailure(f"Failed to write file: {e}", relative_path) from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)

    _log.info(f"Wrote {relative_path} ({len(content)} characters)")
    return resolved


def delete_path(base_path: str, relative_path: str) -> str:
    """
    Delete a file, or a directory with everything beneath it.

    Returns:
        Absolute path deleted

    Raises:
        InvalidPath: If the path escapes or names the base directory
        NotFound: If nothing exists at the path
        IOFailure: If deletion fails part-way
    """
    resolved = resolve_path(base_path, relative_path)
    if resolved == normalize_path(base_path):
        raise InvalidPath("Cannot delete the base directory", relative_path)
    if not os.path.lexists(resolved):
        raise NotFound(f"File or directory not found: {relative_path}", relative_path)

    try:
        if os.path.isdir(resolved) and not os.path.islink(resolved):
            shutil.rmtree(resolved)
            message = "Directory deleted"
        else:
            os.remove(resolved)
            message = "File deleted"
    except OSError as e:
        raise IOFailure(f"Failed to delete: {e}", relative_path) from e

    _log.info(f"{message}: {relative_path}")
    return resolved


def delete_paths(base_path: str, relative_paths: Iterable[str]) -> DeleteOutcome:
    """
    Delete several paths; each one succeeds or fails on its own.

    Returns:
        DeleteOutcome listing deleted paths and per-path failures
    """
    outcome = DeleteOutcome()
    for relative_path in relative_paths:
        try:
            delete_path(base_path, relative_path)
            outcome.deleted.append(relative_path)
        except FileAccessError as e:
            outcome.failed.append(
                DeleteFailure(path=relative_path, kind=e.kind, error=e.message)
            )
    return outcome
