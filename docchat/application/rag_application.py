"""
Application-scoped RAG container.

Holds the immutable vector index and the mutable session history store,
built once at startup and shared by reference with every request. Requests
that arrive before the index is ready wait for it instead of running
against a partial index; a failed build is fatal.

Dependencies: docchat.core, docchat.boundary.llm, docchat.application.document_loader,
    fastapi.concurrency
System role: Startup construction and lifetime of shared pipeline resources
"""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from fastapi.concurrency import run_in_threadpool
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from docchat.application.document_loader import load_document
from docchat.configs.settings import Settings
from docchat.core.answer_generator import AnswerGenerator
from docchat.core.chunker import DocumentChunker
from docchat.core.context_retriever import ContextRetriever
from docchat.core.exceptions import IndexNotReadyError
from docchat.core.orchestrator import ConversationalRAGPipeline
from docchat.core.query_rewriter import QueryRewriter
from docchat.core.session_store import SessionHistoryStore
from docchat.core.vector_index import VectorIndex

logger = logging.getLogger(__name__)


class RAGApplication:
    """Container for the index, session store and request pipeline."""

    def __init__(
        self,
        settings: Settings,
        embeddings: Embeddings,
        rewrite_llm: BaseChatModel,
        answer_llm: BaseChatModel,
        session_store: SessionHistoryStore | None = None,
        document_loader: Callable[[str | Path], list[Document]] = load_document,
    ) -> None:
        """
        Initialize container; nothing is loaded until startup().

        Args:
            settings: Application settings
            embeddings: Embedding capability (document and query modes)
            rewrite_llm: Chat model used by the query rewriter
            answer_llm: Chat model used for streaming answers
            session_store: Session store (new empty store if None)
            document_loader: Collaborator returning the source text
        """
        self.settings = settings
        self.embeddings = embeddings
        self.rewrite_llm = rewrite_llm
        self.answer_llm = answer_llm
        self.session_store = session_store or SessionHistoryStore()
        self._document_loader = document_loader

        self._ready = asyncio.Event()
        self._startup_error: BaseException | None = None
        self._index: VectorIndex | None = None
        self._pipeline: ConversationalRAGPipeline | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "RAGApplication":
        """Create a container wired to the Gemini providers."""
        from docchat.boundary.llm import build_chat_model, build_embeddings

        return cls(
            settings=settings,
            embeddings=build_embeddings(settings.llm),
            rewrite_llm=build_chat_model(settings.llm, temperature=settings.llm.rewrite_temperature),
            answer_llm=build_chat_model(settings.llm),
        )

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set() and self._pipeline is not None

    @property
    def index(self) -> VectorIndex | None:
        return self._index

    async def startup(self, documents: list[Document] | None = None) -> None:
        """
        Load, chunk and index the source document, then build the pipeline.

        Args:
            documents: Pre-loaded documents (loads settings.pipeline.doc_path if None)

        Raises:
            ParsingError: When the document cannot be loaded
            ConfigurationError: When chunking parameters are invalid
            EmbeddingError: When index build fails
        """
        pipeline_settings = self.settings.pipeline
        llm_settings = self.settings.llm
        try:
            if documents is None:
                logger.info(f"{__name__}:startup - Loading document {pipeline_settings.doc_path}")
                documents = await run_in_threadpool(self._document_loader, pipeline_settings.doc_path)

            chunker = DocumentChunker(pipeline_settings.chunk_size, pipeline_settings.chunk_overlap)
            chunks = chunker.split_documents(documents)
            # Blank chunks carry no meaning to embed or retrieve.
            indexable = [chunk for chunk in chunks if chunk.content.strip()]
            logger.info(
                f"{__name__}:startup - Split document into {len(chunks)} chunks "
                f"({len(chunks) - len(indexable)} blank skipped)"
            )

            index = await VectorIndex.build(
                indexable, self.embeddings, batch_size=pipeline_settings.embed_batch_size
            )

            self._index = index
            self._pipeline = ConversationalRAGPipeline(
                rewriter=QueryRewriter(
                    self.rewrite_llm,
                    timeout=llm_settings.rewrite_timeout,
                    rewrite_empty_history=pipeline_settings.rewrite_empty_history,
                ),
                retriever=ContextRetriever(index, k=pipeline_settings.top_k, timeout=llm_settings.retrieval_timeout),
                generator=AnswerGenerator(self.answer_llm, timeout=llm_settings.generation_timeout),
                session_store=self.session_store,
            )
            logger.info(f"{__name__}:startup - Ready with {len(index)} indexed chunks")
        except Exception as e:
            self._startup_error = e
            logger.exception(f"{__name__}:startup - Index build failed: {type(e).__name__}: {e}")
            raise
        finally:
            self._ready.set()

    async def wait_until_ready(self) -> ConversationalRAGPipeline:
        """
        Wait for startup to finish and return the pipeline.

        Raises:
            IndexNotReadyError: When startup failed
        """
        await self._ready.wait()
        if self._pipeline is None:
            raise IndexNotReadyError(
                "Vector index is unavailable",
                details={"startup_error": repr(self._startup_error)},
            )
        return self._pipeline
