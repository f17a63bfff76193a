"""
Librarium - browsable, sandboxed access to a server-local directory tree
and a folder/action prompt library.
"""

from librarium import Config
from librarium.FileAccessGate import FileAccessManager
from librarium.PromptGate import EntryStore

__version__ = "0.1.0"

__all__ = [
    "Config",
    "FileAccessManager",
    "EntryStore",
]
