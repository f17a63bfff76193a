"""
FileAccessGate Pydantic models.

Defines directory listing entries and batch delete outcomes.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DirectoryEntry(BaseModel):
    """One filesystem node as seen by a listing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    relative_path: str = Field(description="Forward-slash path relative to the base directory")
    is_directory: bool
    size: int = Field(default=0, description="Bytes; recursive total for directories")
    modified: datetime
    item_count: Optional[int] = Field(default=None, description="Immediate children (directories only)")
    download_ref: Optional[str] = Field(default=None, description="Opaque download reference (files only)")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dict for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DeleteFailure(BaseModel):
    """A single path that could not be deleted."""
    path: str
    kind: str
    error: str


class DeleteOutcome(BaseModel):
    """Result of deleting a batch of paths."""
    deleted: List[str] = Field(default_factory=list)
    failed: List[DeleteFailure] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")
