"""
Chunk domain models.

Represents document chunks and ranked retrieval results.

Dependencies: pydantic
System role: Document chunk data structure
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Immutable document chunk with positional metadata."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Chunk metadata (source, start_index, chunk_index, page)",
    )

    @property
    def start_index(self) -> int | None:
        """Character offset of the chunk in its originating text."""
        return self.metadata.get("start_index")


class ScoredChunk(BaseModel):
    """Single entry of a ranked retrieval result."""

    model_config = ConfigDict(frozen=True)

    chunk: Chunk = Field(description="Retrieved chunk")
    score: float = Field(description="Cosine similarity to the query (-1.0 to 1.0)")
    position: int = Field(ge=0, description="Position of the chunk in the index (document order)")
