"""
Model provider configuration settings.

Settings for the Gemini chat and embedding models plus per-stage timeouts.

Dependencies: pydantic, pydantic_settings
System role: Generative and embedding capability configuration
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Gemini model identifiers, sampling and stage timeouts."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: SecretStr | None = Field(
        default=None,
        description="Google AI Studio key; when unset the provider reads GOOGLE_API_KEY itself",
    )
    model_name: str = Field(default="gemini-1.5-pro", description="Chat model for rewriting and answering")
    embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Embedding model used for both documents and queries",
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Answer generation temperature")
    rewrite_temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=2.0,
        description="Question rewriting temperature",
    )

    rewrite_timeout: float | None = Field(default=30.0, gt=0, description="Rewrite stage timeout (s)")
    retrieval_timeout: float | None = Field(default=30.0, gt=0, description="Retrieval stage timeout (s)")
    generation_timeout: float | None = Field(
        default=60.0,
        gt=0,
        description="Maximum wait for the next streamed fragment (s)",
    )
