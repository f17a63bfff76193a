"""
Translation of FileAccessGate error kinds to HTTP errors.
"""

from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import quote

from fastapi import HTTPException

from librarium.FileAccessGate import FileAccessError
from librarium.shared.gate import GateLogger

_log = GateLogger.get("Lectern")

DEFAULT_STATUS: Dict[str, int] = {
    "InvalidPath": 400,
    "NotFound": 404,
    "UnsupportedContentType": 400,
    "IOFailure": 500,
}


def to_http(
    error: FileAccessError,
    operation: str,
    overrides: Optional[Dict[str, int]] = None,
) -> HTTPException:
    """
    Log a FileAccessError and convert it to an HTTPException.

    Args:
        error: The failure raised by the manager
        operation: Operation name for logging
        overrides: Per-route status codes by error kind
    """
    status = (overrides or {}).get(error.kind, DEFAULT_STATUS.get(error.kind, 500))
    if status >= 500:
        _log.error(f"{operation} failed ({error.kind}): {error.message}", exc_info=error)
    else:
        _log.warning(f"{operation} rejected ({error.kind}): {error.message}")
    return HTTPException(status_code=status, detail=error.message)


def attachment(filename: str) -> str:
    """Content-Disposition value for a download, safe for non-ASCII names."""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
