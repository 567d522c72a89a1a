"""Shared model for in-process sample content generators."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GeneratedContent(BaseModel):
    """A generated sample document and the filename it would be saved under."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Raw document bytes (UTF-8 for text formats)")
    filename: str = Field(..., description="Suggested filename, e.g. 'consultation-note.pdf'")

    @property
    def size(self) -> int:
        return len(self.data)
