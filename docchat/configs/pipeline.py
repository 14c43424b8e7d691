"""
Retrieval pipeline configuration settings.

Manages the source document location, chunking policy and retrieval depth.
The overlap/size relation is validated here so a bad deployment fails at
startup rather than on the first request.

Dependencies: pydantic, pydantic_settings
System role: Chunking and retrieval configuration for the RAG pipeline
"""

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Document, chunking and retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    doc_path: Path = Field(
        default=Path("data/document.pdf"),
        description="Path to the single source document ingested at startup",
    )
    chunk_size: int = Field(default=1536, gt=0, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=128, ge=0, description="Overlap between consecutive chunks")
    top_k: int = Field(default=4, ge=1, description="Number of chunks retrieved per question")
    embed_batch_size: int = Field(
        default=100,
        ge=1,
        description="Chunks sent per embedding request during index build",
    )
    rewrite_empty_history: bool = Field(
        default=False,
        description="Call the rewriter even when the session has no history",
    )

    @model_validator(mode="after")
    def _overlap_smaller_than_size(self) -> "PipelineSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than chunk_size ({self.chunk_size})"
            )
        return self
