"""
FileAccessGate - Sandboxed file access for Librarium.

Provides:
- Path resolution confined to a single base directory
- Directory listings with recursive sizes and item counts
- Streaming downloads and in-memory zip archives of subtrees
- Text preview restricted to an extension allow-list
- Atomic text writes and recursive deletion

Usage:
    from librarium.FileAccessGate import FileAccessManager

    manager = FileAccessManager("/srv/documents")

    # List the root
    entries = manager.list_directory("")

    # Zip a subtree
    data = manager.create_archive("reports/2024")

    # Stream a file
    with manager.open_read_stream("reports/summary.pdf") as stream:
        ...
"""

import os
from typing import Any, BinaryIO, Dict, Iterable, List, Optional

from librarium.Config.schema import DEFAULT_PREVIEW_EXTENSIONS
from librarium.shared.gate import GateErrorHandler, build_health_status

from .errors import (
    FileAccessError,
    InvalidPath,
    NotFound,
    UnsupportedContentType,
    IOFailure,
)
from .models import DirectoryEntry, DeleteFailure, DeleteOutcome
from .security import normalize_path, resolve_path, validate_name
from . import archive, inspector, operations


class FileAccessManager:
    """
    File access bound to one base directory.

    The base directory and preview allow-list are fixed at construction.
    """

    def __init__(
        self,
        base_directory: str | os.PathLike,
        preview_extensions: Optional[Iterable[str]] = None,
    ):
        self._base = normalize_path(os.fspath(base_directory))
        extensions = DEFAULT_PREVIEW_EXTENSIONS if preview_extensions is None else preview_extensions
        self._preview_extensions = frozenset(e.lower() for e in extensions)

    @property
    def base_directory(self) -> str:
        return self._base

    @property
    def preview_extensions(self) -> frozenset:
        return self._preview_extensions

    def __repr__(self) -> str:
        return f"FileAccessManager({self._base!r})"

    # ==================== Paths ====================

    def resolve(self, relative_path: str) -> str:
        """Resolve a relative path to an absolute path inside the base."""
        return resolve_path(self._base, relative_path)

    # ==================== Inspection ====================

    def list_directory(self, relative_path: str = "") -> List[DirectoryEntry]:
        """List one directory level, directories first, newest first."""
        return inspector.list_directory(self._base, relative_path)

    def calculate_directory_size(self, absolute_path: str) -> int:
        """Recursive size of a directory in bytes."""
        return inspector.calculate_directory_size(absolute_path)

    def count_items(self, absolute_path: str) -> int:
        """Number of immediate children of a directory."""
        return inspector.count_items(absolute_path)

    def list_subdirectories(self, relative_path: str = "") -> List[str]:
        """Names of the immediate subdirectories; empty if the path is missing."""
        resolved = self.resolve(relative_path)
        if not os.path.isdir(resolved):
            return []
        try:
            with os.scandir(resolved) as entries:
                return [e.name for e in entries if e.is_dir()]
        except OSError as e:
            raise IOFailure(f"Failed to list directory: {e}", relative_path) from e

    def list_files(self, relative_path: str = "") -> List[str]:
        """Names of the files directly inside a directory; empty if missing."""
        resolved = self.resolve(relative_path)
        if not os.path.isdir(resolved):
            return []
        try:
            with os.scandir(resolved) as entries:
                return [e.name for e in entries if e.is_file()]
        except OSError as e:
            raise IOFailure(f"Failed to list directory: {e}", relative_path) from e

    # ==================== Streams and archives ====================

    def open_read_stream(self, relative_path: str) -> BinaryIO:
        """Open a file for reading; the caller must close the stream."""
        return archive.open_read_stream(self._base, relative_path)

    def create_archive(self, relative_path: str = "") -> bytes:
        """Zip a directory subtree in memory."""
        return archive.create_archive(self._base, relative_path)

    # ==================== Content ====================

    def read_file(self, relative_path: str) -> str:
        """Read a whole text file regardless of extension."""
        return operations.read_file(self._base, relative_path)

    def read_text(self, relative_path: str) -> str:
        """Read a previewable text file."""
        return operations.read_text(self._base, relative_path, self._preview_extensions)

    def write_text(self, relative_path: str, content: str) -> str:
        """Atomically replace a file's contents."""
        return operations.write_text(self._base, relative_path, content)

    def delete_path(self, relative_path: str) -> str:
        """Delete a file or a whole directory tree."""
        return operations.delete_path(self._base, relative_path)

    def delete_paths(self, relative_paths: Iterable[str]) -> DeleteOutcome:
        """Delete several paths independently."""
        return operations.delete_paths(self._base, relative_paths)

    # ==================== Health Checks ====================

    @GateErrorHandler.wrap("FileAccessGate", "health check", default_return=False)
    def is_healthy(self) -> bool:
        """Check if the base directory is readable."""
        return os.path.isdir(self._base) and os.access(self._base, os.R_OK)

    def get_health_status(self) -> Dict[str, Any]:
        """Get detailed health information."""
        readable = self.is_healthy()
        return build_health_status(
            gate_name="FileAccessGate",
            initialized=True,
            dependencies=self.get_dependencies(),
            checks={"base_directory_readable": readable},
            details={"base_directory": self._base},
        )

    @staticmethod
    def get_dependencies() -> List[str]:
        """List external dependencies."""
        return ["filesystem"]


__all__ = [
    "FileAccessManager",
    # Models
    "DirectoryEntry",
    "DeleteOutcome",
    "DeleteFailure",
    # Errors
    "FileAccessError",
    "InvalidPath",
    "NotFound",
    "UnsupportedContentType",
    "IOFailure",
    # Helpers
    "validate_name",
]
