"""
FileAccessGate archive and stream engine.

Builds zip archives of a subtree in memory and opens forward-only read
streams for single files.
"""

import io
import os
import zipfile
from datetime import datetime
from typing import BinaryIO, Iterator

from librarium.shared.gate import GateLogger

from .errors import IOFailure, NotFound
from .security import resolve_path

_log = GateLogger.get("FileAccessGate")

DEFAULT_CHUNK_SIZE = 64 * 1024

# drwxrwxr-x plus the MS-DOS directory flag
_DIR_ATTR = (0o40775 << 16) | 0x10
# Range representable by the MS-DOS date fields of a zip header
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
_ZIP_LAST = (2107, 12, 31, 23, 59, 59)


def open_read_stream(base_path: str, relative_path: str) -> BinaryIO:
    """
    Open a file for sequential binary reading.

    The caller owns the returned stream and must close it.

    Raises:
        InvalidPath: If the path escapes the base directory
        NotFound: If the path does not exist or is a directory
        IOFailure: If the file cannot be opened
    """
    resolved = resolve_path(base_path, relative_path)
    if not os.path.isfile(resolved):
        raise NotFound(f"File not found: {relative_path}", relative_path)
    try:
        return open(resolved, "rb")
    except OSError as e:
        raise IOFailure(f"Failed to open file: {e}", relative_path) from e


def iter_chunks(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield a stream in fixed-size chunks, closing it when done or abandoned."""
    try:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            yield chunk
    finally:
        stream.close()


def _add_directory_entry(zf: zipfile.ZipFile, arcname: str, path: str):
    mtime = datetime.fromtimestamp(os.stat(path).st_mtime).timetuple()[:6]
    date_time = min(max(mtime, _ZIP_EPOCH), _ZIP_LAST)
    info = zipfile.ZipInfo(arcname.rstrip("/") + "/", date_time=date_time)
    info.external_attr = _DIR_ATTR
    zf.writestr(info, b"")


def _add_tree(zf: zipfile.ZipFile, root: str) -> int:
    """Depth-first walk adding every file and directory below root."""
    file_count = 0
    stack = [(root, "")]
    while stack:
        current, prefix = stack.pop()
        if prefix:
            _add_directory_entry(zf, prefix, current)

        with os.scandir(current) as entries:
            children = list(entries)

        subdirs = []
        for entry in children:
            arcname = f"{prefix}/{entry.name}" if prefix else entry.name
            if entry.is_dir():
                subdirs.append((entry.path, arcname))
            elif entry.is_file():
                zf.write(entry.path, arcname)
                file_count += 1
            else:
                _log.debug(f"Not archiving {entry.path}: not a regular file or directory")

        # Reversed so the first subdirectory is visited first
        stack.extend(reversed(subdirs))
    return file_count


def create_archive(base_path: str, relative_path: str = "") -> bytes:
    """
    Build a deflate-compressed zip of a directory subtree.

    Archive member paths are relative to the archive root. Empty
    directories are kept as folder entries. The whole archive is held in
    memory; a failure anywhere in the walk produces no output.

    Args:
        base_path: Base directory
        relative_path: Directory to archive ("" = root)

    Returns:
        Zip archive bytes

    Raises:
        InvalidPath: If the path escapes the base directory
        NotFound: If the directory does not exist
        IOFailure: If reading or compressing fails
    """
    resolved = resolve_path(base_path, relative_path)
    if not os.path.isdir(resolved):
        raise NotFound(f"Directory not found: {relative_path or '/'}", relative_path)

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(
            buffer, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False
        ) as zf:
            file_count = _add_tree(zf, resolved)
    except (OSError, zipfile.LargeZipFile) as e:
        raise IOFailure(f"Failed to build archive: {e}", relative_path) from e

    data = buffer.getvalue()
    _log.debug(f"Archived {file_count} files from '{relative_path or '/'}' ({len(data)} bytes)")
    return data
