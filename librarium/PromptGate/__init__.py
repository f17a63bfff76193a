"""
PromptGate - Prompt library storage for Librarium.

A prompt library is a two-level hierarchy of small text files:

    <root>/<folder>/<action>/<filename>

Each folder may hold an ``actions_order.json`` file, a JSON array of
action names recording their display order. Files placed directly in a
folder (no action) are addressed with an empty action.

Usage:
    from librarium.PromptGate import EntryStore

    store = EntryStore("/srv/prompts")
    store.write_entry("support", "triage", "greeting.yml", "text: hello")
    store.save_order("support", ["triage", "escalate"])
"""

import json
import os
from typing import Any, Dict, Iterable, List, Optional

from librarium.Config.schema import DEFAULT_PROMPT_EXTENSIONS
from librarium.shared.gate import GateLogger, build_health_status
from librarium.FileAccessGate import FileAccessManager, NotFound, validate_name
from librarium.FileAccessGate.security import check_extension_allowed

from .models import PromptFile, PromptFolder

_log = GateLogger.get("PromptGate")

ORDER_FILENAME = "actions_order.json"


class EntryStore:
    """
    Folder/action/file storage on top of a FileAccessManager.

    Every call re-reads the filesystem; concurrent writes to the same
    entry resolve as last write wins.
    """

    def __init__(
        self,
        base_directory: str | os.PathLike | FileAccessManager,
        prompt_extensions: Optional[Iterable[str]] = None,
    ):
        if isinstance(base_directory, FileAccessManager):
            self._files = base_directory
        else:
            self._files = FileAccessManager(base_directory)
        extensions = DEFAULT_PROMPT_EXTENSIONS if prompt_extensions is None else prompt_extensions
        self._prompt_extensions = frozenset(e.lower() for e in extensions)

    @property
    def files(self) -> FileAccessManager:
        return self._files

    @property
    def base_directory(self) -> str:
        return self._files.base_directory

    @staticmethod
    def _entry_path(folder: str, action: Optional[str], filename: Optional[str] = None) -> str:
        parts = [validate_name(folder, "folder")]
        if action:
            parts.append(validate_name(action, "action"))
        if filename is not None:
            parts.append(validate_name(filename, "filename"))
        return "/".join(parts)

    # ==================== Listing ====================

    def list_folders(self) -> List[str]:
        """Top-level folders of the library."""
        return sorted(self._files.list_subdirectories(""))

    def list_actions(self, folder: str) -> List[str]:
        """Actions inside a folder; empty if the folder is missing."""
        return sorted(self._files.list_subdirectories(self._entry_path(folder, None)))

    def list_entries(self, folder: str, action: Optional[str]) -> List[str]:
        """Files directly inside folder/action; empty if missing."""
        return sorted(self._files.list_files(self._entry_path(folder, action)))

    def list_prompt_files(self, folder: str) -> List[str]:
        """Folder-level files with a prompt extension, order file excluded."""
        return [
            name for name in self.list_entries(folder, None)
            if name != ORDER_FILENAME and check_extension_allowed(name, self._prompt_extensions)
        ]

    def list_library(self) -> List[PromptFolder]:
        """Every folder with its folder-level prompt files."""
        return [
            PromptFolder(
                folder=folder,
                prompts=[
                    PromptFile(name=name, path=f"{folder}/{name}")
                    for name in self.list_prompt_files(folder)
                ],
            )
            for folder in self.list_folders()
        ]

    # ==================== Entries ====================

    def read_entry(self, folder: str, action: Optional[str], filename: str) -> str:
        """
        Read one entry.

        Raises:
            NotFound: If the entry does not exist
        """
        return self._files.read_file(self._entry_path(folder, action, filename))

    def write_entry(self, folder: str, action: Optional[str], filename: str, content: str):
        """Create or atomically replace an entry, creating folders as needed."""
        self._files.write_text(self._entry_path(folder, action, filename), content)

    def delete_entry(self, folder: str, action: Optional[str], filename: str) -> bool:
        """
        Delete one entry.

        Returns:
            True if a file was removed, False if there was nothing to delete
        """
        path = self._entry_path(folder, action, filename)
        try:
            self._files.delete_path(path)
        except NotFound:
            return False
        return True

    def delete_folder_or_file(self, relative_path: str) -> str:
        """
        Delete any path in the library, recursively for directories.

        Raises:
            NotFound: If the path does not exist
        """
        return self._files.delete_path(relative_path)

    # ==================== Ordering ====================

    def get_order(self, folder: str) -> List[str]:
        """Saved action order for a folder; empty if none was saved."""
        path = self._entry_path(folder, None, ORDER_FILENAME)
        try:
            content = self._files.read_file(path)
        except NotFound:
            return []

        try:
            order = json.loads(content)
        except json.JSONDecodeError as e:
            _log.warning(f"Ignoring unreadable order file for '{folder}': {e}")
            return []

        if not isinstance(order, list) or not all(isinstance(n, str) for n in order):
            _log.warning(f"Ignoring malformed order file for '{folder}'")
            return []
        return order

    def save_order(self, folder: str, ordered_names: Iterable[str]):
        """Replace the saved action order for a folder."""
        names = list(ordered_names)
        path = self._entry_path(folder, None, ORDER_FILENAME)
        self._files.write_text(path, json.dumps(names, indent=2))

    def ordered_actions(self, folder: str) -> List[str]:
        """
        Actions in display order.

        Saved order first, skipping names that no longer exist; the rest
        follow alphabetically.
        """
        actions = self.list_actions(folder)
        present = set(actions)
        ordered = [name for name in dict.fromkeys(self.get_order(folder)) if name in present]
        placed = set(ordered)
        return ordered + [name for name in actions if name not in placed]

    # ==================== Health Checks ====================

    def get_health_status(self) -> Dict[str, Any]:
        """Get detailed health information."""
        base = self.base_directory
        return build_health_status(
            gate_name="PromptGate",
            initialized=True,
            dependencies=["filesystem"],
            checks={"library_readable": self._files.is_healthy()},
            details={"base_directory": base},
        )


__all__ = [
    "EntryStore",
    "PromptFile",
    "PromptFolder",
    "ORDER_FILENAME",
]
