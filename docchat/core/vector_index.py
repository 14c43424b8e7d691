"""
In-memory vector index with exact cosine search.

Embeds every chunk once at startup and answers nearest-neighbour queries
with a linear scan. Suitable for a single, static document; a corpus of
production size would need an approximate nearest-neighbour structure.

Documents are embedded with ``aembed_documents`` and questions with
``aembed_query``: providers such as Gemini map these to distinct
retrieval-document / retrieval-query task types, and the two spaces are
not interchangeable.

Dependencies: numpy, langchain_core.embeddings
System role: Retrieval store for the RAG pipeline
"""

import logging
from dataclasses import dataclass

import numpy as np
from langchain_core.embeddings import Embeddings

from docchat.core.exceptions import ConfigurationError, EmbeddingError
from docchat.models.chunk import Chunk, ScoredChunk

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 4


@dataclass(frozen=True)
class IndexEntry:
    """Chunk paired with its document-mode embedding."""

    chunk: Chunk
    vector: np.ndarray
    position: int


class VectorIndex:
    """
    Immutable collection of IndexEntry objects.

    Build with ``VectorIndex.build``; the instance is read-only afterwards
    so concurrent queries need no locking.
    """

    def __init__(self, entries: list[IndexEntry], embeddings: Embeddings) -> None:
        """
        Initialize index from already embedded entries.

        Args:
            entries: Entries in document order
            embeddings: Embedding capability used for queries
        """
        self._entries = tuple(entries)
        self._embeddings = embeddings
        if self._entries:
            self._matrix = np.vstack([entry.vector for entry in self._entries])
            self._norms = np.linalg.norm(self._matrix, axis=1)
        else:
            self._matrix = np.empty((0, 0), dtype=np.float64)
            self._norms = np.empty(0, dtype=np.float64)

    @classmethod
    async def build(
        cls,
        chunks: list[Chunk],
        embeddings: Embeddings,
        batch_size: int = 100,
    ) -> "VectorIndex":
        """
        Embed all chunks and return a ready index.

        Build is all-or-nothing: any failure raises and no index is returned.

        Args:
            chunks: Chunks in document order
            embeddings: Embedding capability (document mode used here)
            batch_size: Chunks per embedding request

        Returns:
            VectorIndex: Index holding one entry per chunk

        Raises:
            EmbeddingError: When the provider fails or returns inconsistent vectors
        """
        if batch_size < 1:
            raise ConfigurationError(f"batch_size must be positive, got {batch_size}", field="batch_size")

        logger.info("Building vector index", extra={"chunks": len(chunks), "batch_size": batch_size})

        vectors: list[list[float]] = []
        for start in range(0, len(chunks), batch_size):
            batch = chunks[start : start + batch_size]
            try:
                batch_vectors = await embeddings.aembed_documents([chunk.content for chunk in batch])
            except Exception as e:
                raise EmbeddingError(
                    f"Failed to embed chunks {start}-{start + len(batch) - 1}: {e}",
                    operation="build",
                ) from e
            if len(batch_vectors) != len(batch):
                raise EmbeddingError(
                    f"Embedding provider returned {len(batch_vectors)} vectors for {len(batch)} chunks",
                    operation="build",
                )
            vectors.extend(batch_vectors)

        entries: list[IndexEntry] = []
        dimension: int | None = None
        for position, (chunk, raw_vector) in enumerate(zip(chunks, vectors)):
            vector = np.asarray(raw_vector, dtype=np.float64)
            if vector.ndim != 1 or vector.size == 0:
                raise EmbeddingError(
                    f"Invalid embedding for chunk {position}",
                    operation="build",
                    details={"shape": list(vector.shape)},
                )
            if dimension is None:
                dimension = vector.size
            elif vector.size != dimension:
                raise EmbeddingError(
                    f"Embedding dimension mismatch at chunk {position}: {vector.size} != {dimension}",
                    operation="build",
                )
            entries.append(IndexEntry(chunk=chunk, vector=vector, position=position))

        logger.info("Vector index built", extra={"entries": len(entries), "dimension": dimension})
        return cls(entries, embeddings)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[IndexEntry, ...]:
        return self._entries

    @property
    def dimension(self) -> int | None:
        """Shared vector length, or None for an empty index."""
        return self._matrix.shape[1] if self._entries else None

    async def query(self, question: str, k: int = DEFAULT_TOP_K) -> list[ScoredChunk]:
        """
        Return the k chunks most similar to the question.

        Args:
            question: Query text (embedded in query mode)
            k: Maximum number of results

        Returns:
            list[ScoredChunk]: min(k, len(index)) results, descending score,
            ties broken by document order

        Raises:
            ConfigurationError: When k < 1
            EmbeddingError: When the query cannot be embedded
        """
        if k < 1:
            raise ConfigurationError(f"k must be at least 1, got {k}", field="k")
        if not self._entries:
            return []

        try:
            raw_query = await self._embeddings.aembed_query(question)
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}", operation="query") from e

        query_vector = np.asarray(raw_query, dtype=np.float64)
        if query_vector.shape != (self._matrix.shape[1],):
            raise EmbeddingError(
                f"Query embedding has shape {query_vector.shape}, index dimension is {self._matrix.shape[1]}",
                operation="query",
            )

        scores = self._cosine_scores(query_vector)
        # lexsort sorts by the last key first: score descending, then position ascending.
        positions = np.arange(len(self._entries))
        order = np.lexsort((positions, -scores))[:k]

        return [
            ScoredChunk(
                chunk=self._entries[i].chunk,
                score=float(scores[i]),
                position=self._entries[i].position,
            )
            for i in order
        ]

    def _cosine_scores(self, query_vector: np.ndarray) -> np.ndarray:
        denominators = self._norms * np.linalg.norm(query_vector)
        dots = self._matrix @ query_vector
        with np.errstate(divide="ignore", invalid="ignore"):
            scores = np.where(denominators > 0, dots / denominators, 0.0)
        return scores

    def __repr__(self) -> str:
        return f"VectorIndex(entries={len(self)}, dimension={self.dimension})"
