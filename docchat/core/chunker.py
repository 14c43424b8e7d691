"""
Text chunking using RecursiveCharacterTextSplitter.

Splits the source document into overlapping, bounded-size chunks that
record their character offset so retrieved passages can be traced back.

Dependencies: langchain_text_splitters, langchain_core.documents
System role: First stage of index construction
"""

import logging
from typing import Any

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

from docchat.core.exceptions import ConfigurationError
from docchat.models.chunk import Chunk

logger = logging.getLogger(__name__)

# Paragraph, line, sentence, word, then hard character cut.
DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


def validate_chunk_params(chunk_size: int, chunk_overlap: int) -> None:
    """
    Check chunking parameters.

    Raises:
        ConfigurationError: When size is not positive, overlap is negative,
            or overlap is not smaller than size
    """
    if chunk_size <= 0:
        raise ConfigurationError(
            f"chunk_size must be positive, got {chunk_size}",
            field="chunk_size",
        )
    if chunk_overlap < 0:
        raise ConfigurationError(
            f"chunk_overlap must not be negative, got {chunk_overlap}",
            field="chunk_overlap",
        )
    if chunk_overlap >= chunk_size:
        raise ConfigurationError(
            f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})",
            field="chunk_overlap",
        )


def locate_pieces(text: str, pieces: list[str], chunk_overlap: int) -> list[int]:
    """
    Find the offset of each split piece in the text it came from.

    The splitter carries at most chunk_overlap characters from one piece
    into the next and drops nothing, so each piece starts within
    chunk_overlap characters before the previous piece's end. The earliest
    matching offset in that window is taken; in a run of repeated
    characters (e.g. blank lines) a plain text.find would land too early.

    Args:
        text: Source text
        pieces: Pieces produced by splitting text, in order
        chunk_overlap: Overlap the pieces were split with

    Returns:
        list[int]: Start offset of every piece
    """
    offsets: list[int] = []
    previous_start = -1
    end = 0
    for piece in pieces:
        window = range(max(previous_start + 1, end - chunk_overlap), end + 1)
        start = next((offset for offset in window if text.startswith(piece, offset)), None)
        if start is None:
            start = text.find(piece, previous_start + 1)
            if start < 0:
                logger.warning("Split piece not found in source text", extra={"piece_length": len(piece)})
                start = end
        offsets.append(start)
        previous_start = start
        end = max(end, start + len(piece))
    return offsets


class DocumentChunker:
    """Split raw text or loaded documents into Chunk models."""

    def __init__(self, chunk_size: int = 1536, chunk_overlap: int = 128) -> None:
        """
        Initialize chunker with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ConfigurationError: When the parameters are inconsistent
        """
        validate_chunk_params(chunk_size, chunk_overlap)
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        # Whitespace and separators are kept so the pieces rebuild the source exactly.
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=DEFAULT_SEPARATORS,
            keep_separator=True,
            strip_whitespace=False,
            length_function=len,
        )

    def split_text(self, raw_text: str, metadata: dict[str, Any] | None = None) -> list[Chunk]:
        """
        Split one text into chunks in document order.

        Args:
            raw_text: Text to split
            metadata: Metadata copied onto every chunk

        Returns:
            list[Chunk]: Chunks with start_index and chunk_index metadata
        """
        return self.split_documents([Document(page_content=raw_text, metadata=metadata or {})])

    def split_documents(self, documents: list[Document]) -> list[Chunk]:
        """
        Split loaded documents (e.g. PDF pages) into chunks.

        Every character of a document lands in at least one chunk, blank
        runs included; callers that embed chunks skip the blank ones.
        chunk_index runs across all documents so it reflects global order.

        Args:
            documents: LangChain Documents, in document order

        Returns:
            list[Chunk]: Chunks with preserved loader metadata
        """
        chunks: list[Chunk] = []
        for document in documents:
            text = document.page_content
            pieces = self._splitter.split_text(text)
            for piece, start in zip(pieces, locate_pieces(text, pieces, self.chunk_overlap)):
                chunks.append(
                    Chunk(
                        content=piece,
                        metadata={**document.metadata, "start_index": start, "chunk_index": len(chunks)},
                    )
                )
        logger.debug(
            "Split documents into chunks",
            extra={
                "documents": len(documents),
                "chunks": len(chunks),
                "chunk_size": self.chunk_size,
                "chunk_overlap": self.chunk_overlap,
            },
        )
        return chunks


def split_text(
    raw_text: str,
    chunk_size: int,
    chunk_overlap: int,
    metadata: dict[str, Any] | None = None,
) -> list[Chunk]:
    """
    Split raw text into overlapping chunks no longer than chunk_size.

    Args:
        raw_text: Document text
        chunk_size: Maximum chunk length in characters
        chunk_overlap: Characters shared between neighbouring chunks
        metadata: Metadata copied onto every chunk (e.g. source)

    Returns:
        list[Chunk]: Chunks in document order

    Raises:
        ConfigurationError: When chunk_overlap >= chunk_size or either is out of range
    """
    return DocumentChunker(chunk_size, chunk_overlap).split_text(raw_text, metadata)
