"""
Model provider adapters.

Exports factories for the Gemini chat and embedding models.
"""

from docchat.boundary.llm.providers import build_chat_model, build_embeddings

__all__ = ["build_chat_model", "build_embeddings"]
