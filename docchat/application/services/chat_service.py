"""
Chat service for conversational Q&A with RAG.

Exposes the inbound streaming operation consumed by the transport layer:
validates the request at the boundary, waits for the index, runs the
pipeline and yields UTF-8 encoded answer fragments. Also serves the
read-only history view.

Dependencies: docchat.application.rag_application, docchat.core
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator

from langchain_core.messages import BaseMessage

from docchat.application.rag_application import RAGApplication
from docchat.core.exceptions import InvalidRequestError, SessionNotFoundError
from docchat.core.orchestrator import PipelineRun
from docchat.core.session_store import validate_session_id
from docchat.models.chat import ChatHistoryResponse, ChatMessageResponse, MessageRole

logger = logging.getLogger(__name__)


def validate_question(question: object) -> str:
    """
    Validate the question field.

    Raises:
        InvalidRequestError: When the question is missing or blank
    """
    if not isinstance(question, str) or not question.strip():
        raise InvalidRequestError("question is required", field="question")
    return question


class ChatService:
    """
    Chat service for conversational Q&A.

    Coordinates request validation, readiness, pipeline invocation and
    byte encoding for streaming transports.
    """

    def __init__(self, application: RAGApplication) -> None:
        """
        Initialize chat service.

        Args:
            application: App-scoped RAG container
        """
        self.application = application

    def respond(
        self,
        question: str | None,
        session_id: str | None,
        run: PipelineRun | None = None,
    ) -> AsyncGenerator[bytes, None]:
        """
        Validate the request and return the answer byte stream.

        Validation happens eagerly, before any pipeline stage runs.

        Args:
            question: User question
            session_id: Opaque session identifier
            run: Optional run record for observing pipeline progress

        Returns:
            AsyncGenerator[bytes, None]: UTF-8 encoded answer fragments

        Raises:
            InvalidRequestError: When either field is missing or malformed
        """
        question = validate_question(question)
        session_id = validate_session_id(session_id)
        return self._stream(question, session_id, run)

    async def _stream(
        self,
        question: str,
        session_id: str,
        run: PipelineRun | None,
    ) -> AsyncGenerator[bytes, None]:
        logger.info(f"{__name__}:respond - START session_id={session_id}, question_len={len(question)}")
        pipeline = await self.application.wait_until_ready()

        fragments = pipeline.respond(question, session_id, run=run)
        try:
            async for fragment in fragments:
                yield fragment.encode("utf-8")
        finally:
            await fragments.aclose()
        logger.info(f"{__name__}:respond - END session_id={session_id}")

    def get_history(self, session_id: str) -> ChatHistoryResponse:
        """
        Return the conversation history of an existing session.

        Raises:
            InvalidRequestError: When session_id is malformed
            SessionNotFoundError: When the session has never been used
        """
        session_id = validate_session_id(session_id)
        session = self.application.session_store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)

        messages = [_to_response(message) for message in session.snapshot()]
        return ChatHistoryResponse(session_id=session_id, messages=messages, total=len(messages))


def _to_response(message: BaseMessage) -> ChatMessageResponse:
    role = MessageRole.USER if message.type == "human" else MessageRole.ASSISTANT
    return ChatMessageResponse(role=role, content=str(message.content))
