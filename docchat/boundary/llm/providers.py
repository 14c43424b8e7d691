"""
Gemini model factories.

Creates the chat models (rewrite and answer) and the embedding model from
settings. GoogleGenerativeAIEmbeddings embeds documents with the
RETRIEVAL_DOCUMENT task type and queries with RETRIEVAL_QUERY, which is
what the vector index relies on.

Dependencies: langchain_google_genai, docchat.configs
System role: Generative and embedding capability construction
"""

import logging
from typing import Any

from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

from docchat.configs.llm import LLMSettings

logger = logging.getLogger(__name__)


def _credentials(settings: LLMSettings) -> dict[str, Any]:
    if settings.google_api_key is None:
        return {}
    return {"google_api_key": settings.google_api_key.get_secret_value()}


def build_chat_model(settings: LLMSettings, temperature: float | None = None) -> ChatGoogleGenerativeAI:
    """
    Create a Gemini chat model.

    Args:
        settings: Model settings
        temperature: Override for settings.temperature

    Returns:
        ChatGoogleGenerativeAI: Chat model supporting ainvoke and astream
    """
    temperature = settings.temperature if temperature is None else temperature
    logger.info(
        f"{__name__}:build_chat_model - model={settings.model_name}, temperature={temperature}"
    )
    return ChatGoogleGenerativeAI(
        model=settings.model_name,
        temperature=temperature,
        **_credentials(settings),
    )


def build_embeddings(settings: LLMSettings) -> GoogleGenerativeAIEmbeddings:
    """
    Create the Gemini embedding model shared by index build and queries.

    Args:
        settings: Model settings

    Returns:
        GoogleGenerativeAIEmbeddings: Embeddings with document and query modes
    """
    logger.info(f"{__name__}:build_embeddings - model={settings.embedding_model}")
    return GoogleGenerativeAIEmbeddings(
        model=settings.embedding_model,
        **_credentials(settings),
    )
