"""
PromptGate Pydantic models.
"""

from typing import List, Dict, Any
from pydantic import BaseModel, Field


class PromptFile(BaseModel):
    """A prompt file listed at folder level."""
    name: str
    path: str = Field(description="Path relative to the prompt library root")


class PromptFolder(BaseModel):
    """A top-level folder with its prompt files."""
    folder: str
    prompts: List[PromptFile] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")
