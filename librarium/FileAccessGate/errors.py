"""
FileAccessGate error kinds.

Every failure surfaced by the manager is one of these; the HTTP boundary
maps ``kind`` to a status code.
"""


class FileAccessError(Exception):
    """Base class for file access failures."""

    kind = "IOFailure"

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.message = message
        self.path = path


class InvalidPath(FileAccessError):
    """Raised when a path would escape the base directory."""

    kind = "InvalidPath"


class NotFound(FileAccessError):
    """Raised when a target is absent or of the wrong type."""

    kind = "NotFound"


class UnsupportedContentType(FileAccessError):
    """Raised when a text preview is requested for a non-text target."""

    kind = "UnsupportedContentType"


class IOFailure(FileAccessError):
    """Raised for read/write/archive errors not otherwise classified."""

    kind = "IOFailure"
