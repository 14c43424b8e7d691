"""
Test suite for Gemini model factories.

Tests model construction arguments with the provider classes patched.

System role: Verification of capability construction
"""

from unittest.mock import patch

from pydantic import SecretStr

from docchat.boundary.llm.providers import build_chat_model, build_embeddings
from docchat.configs.llm import LLMSettings


class TestBuildChatModel:
    """Test suite for build_chat_model."""

    def test_should_use_configured_model_and_temperature(self) -> None:
        """Test defaults come from settings."""
        # Arrange
        settings = LLMSettings(model_name="gemini-test", temperature=0.3, google_api_key=None)

        # Act
        with patch("docchat.boundary.llm.providers.ChatGoogleGenerativeAI") as chat_cls:
            build_chat_model(settings)

        # Assert
        chat_cls.assert_called_once_with(model="gemini-test", temperature=0.3)

    def test_should_override_temperature_and_pass_key(self) -> None:
        """Test explicit temperature wins and the secret key is unwrapped."""
        # Arrange
        settings = LLMSettings(google_api_key=SecretStr("secret-key"))

        # Act
        with patch("docchat.boundary.llm.providers.ChatGoogleGenerativeAI") as chat_cls:
            build_chat_model(settings, temperature=0.0)

        # Assert
        kwargs = chat_cls.call_args.kwargs
        assert kwargs["temperature"] == 0.0
        assert kwargs["google_api_key"] == "secret-key"


class TestBuildEmbeddings:
    """Test suite for build_embeddings."""

    def test_should_use_embedding_model(self) -> None:
        """Test the embedding model name is passed through."""
        # Arrange
        settings = LLMSettings(embedding_model="models/test-embedding", google_api_key=None)

        # Act
        with patch("docchat.boundary.llm.providers.GoogleGenerativeAIEmbeddings") as embeddings_cls:
            build_embeddings(settings)

        # Assert
        embeddings_cls.assert_called_once_with(model="models/test-embedding")
