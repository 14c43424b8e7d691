"""
Shared test fixtures and configuration for entire test suite.

Provides: settings and RAG container factories over the fakes in fakes.py
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

from typing import Any

import pytest
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from docchat.application.rag_application import RAGApplication
from docchat.configs.llm import LLMSettings
from docchat.configs.pipeline import PipelineSettings
from docchat.configs.settings import Settings

from fakes import ContextEchoChatModel, KeywordEmbeddings, ScriptedChatModel


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    """Provide recording keyword embeddings."""
    return KeywordEmbeddings()


@pytest.fixture
def rewrite_llm() -> ScriptedChatModel:
    """Provide rewriter model answering with a standalone question."""
    return ScriptedChatModel(responses=["What color is the grass?"])


@pytest.fixture
def answer_llm() -> ContextEchoChatModel:
    """Provide answer model quoting retrieved context."""
    return ContextEchoChatModel()


@pytest.fixture
def sky_grass_documents() -> list[Document]:
    """Provide two-sentence document split into one chunk per sentence."""
    return [Document(page_content="The sky is blue. The grass is green.", metadata={"source": "colors.txt"})]


@pytest.fixture
def make_settings():
    """Provide factory for settings with small, test-friendly chunking."""

    def _make(**pipeline_overrides: Any) -> Settings:
        pipeline_values = {"chunk_size": 30, "chunk_overlap": 0, "top_k": 1}
        pipeline_values.update(pipeline_overrides)
        return Settings(
            pipeline=PipelineSettings(**pipeline_values),
            llm=LLMSettings(
                google_api_key=None,
                rewrite_timeout=2.0,
                retrieval_timeout=2.0,
                generation_timeout=2.0,
            ),
        )

    return _make


@pytest.fixture
def make_application(make_settings, keyword_embeddings, rewrite_llm, answer_llm, sky_grass_documents):
    """
    Provide factory for an unstarted RAGApplication over fake providers.

    Keyword arguments override the default collaborators.
    """

    def _make(
        settings: Settings | None = None,
        embeddings: Embeddings | None = None,
        rewrite_model: BaseChatModel | None = None,
        answer_model: BaseChatModel | None = None,
        documents: list[Document] | None = None,
    ) -> RAGApplication:
        loaded = sky_grass_documents if documents is None else documents
        return RAGApplication(
            settings=settings or make_settings(),
            embeddings=embeddings or keyword_embeddings,
            rewrite_llm=rewrite_model or rewrite_llm,
            answer_llm=answer_model or answer_llm,
            document_loader=lambda path: loaded,
        )

    return _make
