"""
Core business logic module.

Contains the retrieval-and-generation pipeline and the exception hierarchy.
"""

from docchat.core.exceptions import (
    ConfigurationError,
    DocChatException,
    EmbeddingError,
    GenerationError,
    IndexNotReadyError,
    InvalidRequestError,
    ParsingError,
    SessionNotFoundError,
    StageTimeoutError,
)
from docchat.core.answer_generator import AnswerGenerator
from docchat.core.chunker import DocumentChunker, split_text
from docchat.core.context_retriever import ContextRetriever, format_context
from docchat.core.orchestrator import ConversationalRAGPipeline, PipelineRun, PipelineStage
from docchat.core.query_rewriter import QueryRewriter
from docchat.core.session_store import ConversationSession, SessionHistoryStore, validate_session_id
from docchat.core.vector_index import VectorIndex

__all__ = [
    # Exceptions
    "DocChatException",
    "ConfigurationError",
    "InvalidRequestError",
    "ParsingError",
    "EmbeddingError",
    "GenerationError",
    "StageTimeoutError",
    "SessionNotFoundError",
    "IndexNotReadyError",
    # Pipeline
    "DocumentChunker",
    "split_text",
    "VectorIndex",
    "ConversationSession",
    "SessionHistoryStore",
    "validate_session_id",
    "QueryRewriter",
    "ContextRetriever",
    "format_context",
    "AnswerGenerator",
    "ConversationalRAGPipeline",
    "PipelineRun",
    "PipelineStage",
]
