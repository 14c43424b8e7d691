"""
Chat domain models and schemas.

Request/response schemas for the generate and history endpoints.

Dependencies: pydantic
System role: Chat API contracts
"""

from enum import Enum

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


class GenerateRequest(BaseModel):
    """
    Request schema for the streaming generate endpoint.

    Fields are optional at the schema level so that missing values are
    reported by the service as a 400 rather than a schema 422.
    """

    question: str | None = Field(default=None, description="User question")
    session_id: str | None = Field(default=None, description="Opaque conversation identifier")


class ChatMessageResponse(BaseModel):
    """Single chat message in history."""

    role: MessageRole = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    session_id: str
    messages: list[ChatMessageResponse]
    total: int = Field(description="Total number of messages")
