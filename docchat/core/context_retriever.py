"""
Context retrieval and serialization.

Queries the vector index with the standalone question and serializes the
ranked chunks into one delimiter-wrapped context block for the prompt.

Dependencies: docchat.core.vector_index
System role: Second stage of the conversational RAG pipeline
"""

import asyncio
import logging

from docchat.core.exceptions import StageTimeoutError
from docchat.core.vector_index import DEFAULT_TOP_K, VectorIndex
from docchat.models.chunk import ScoredChunk

logger = logging.getLogger(__name__)


def format_context(results: list[ScoredChunk]) -> str:
    """
    Wrap each chunk in <doc> tags and join with newlines, preserving rank order.

    Returns an empty string when there are no results.
    """
    return "\n".join(f"<doc>\n{result.chunk.content}\n</doc>" for result in results)


class ContextRetriever:
    """Retrieve and format grounding passages for a question."""

    def __init__(self, index: VectorIndex, k: int = DEFAULT_TOP_K, timeout: float | None = None) -> None:
        self._index = index
        self._k = k
        self._timeout = timeout

    async def retrieve_chunks(self, standalone_question: str) -> list[ScoredChunk]:
        """
        Query the index.

        Raises:
            EmbeddingError: When the query cannot be embedded
            StageTimeoutError: When the query exceeds the timeout
        """
        try:
            results = await asyncio.wait_for(
                self._index.query(standalone_question, k=self._k),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise StageTimeoutError("retrieve", self._timeout) from e

        logger.debug(
            "Retrieved chunks",
            extra={
                "results": len(results),
                "top_score": results[0].score if results else None,
            },
        )
        return results

    async def retrieve(self, standalone_question: str) -> str:
        """
        Return the serialized context block for a standalone question.

        An empty index yields an empty block rather than an error.
        """
        return format_context(await self.retrieve_chunks(standalone_question))
