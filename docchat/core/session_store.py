"""
Process-lifetime conversation history store.

Maps opaque session identifiers to append-only message histories.
Sessions are created lazily on first reference and live until the
process exits; there is no eviction or expiry.

Each session carries an ``asyncio.Lock`` that the orchestrator holds for
the duration of a request, so concurrent requests for the same session
are serialized and history stays in causal order.

Dependencies: langchain_core.chat_history, langchain_core.messages
System role: Shared mutable conversation state
"""

import asyncio
import logging
import re
from datetime import datetime, timezone

from langchain_core.chat_history import InMemoryChatMessageHistory
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from docchat.core.exceptions import InvalidRequestError

logger = logging.getLogger(__name__)

MAX_SESSION_ID_LENGTH = 128
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def validate_session_id(session_id: object) -> str:
    """
    Validate an opaque session identifier at the boundary.

    Args:
        session_id: Raw value received from the caller

    Returns:
        str: The identifier, stripped of surrounding whitespace

    Raises:
        InvalidRequestError: When the value is missing, empty, too long,
            or contains control characters
    """
    if not isinstance(session_id, str) or not session_id.strip():
        raise InvalidRequestError("session_id is required", field="session_id")
    session_id = session_id.strip()
    if len(session_id) > MAX_SESSION_ID_LENGTH:
        raise InvalidRequestError(
            f"session_id must be at most {MAX_SESSION_ID_LENGTH} characters",
            field="session_id",
        )
    if _CONTROL_CHARS_RE.search(session_id):
        raise InvalidRequestError("session_id contains control characters", field="session_id")
    return session_id


class ConversationSession:
    """Ordered, append-only message history for one session."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.created_at = datetime.now(timezone.utc)
        self.lock = asyncio.Lock()
        self._history = InMemoryChatMessageHistory()

    @property
    def messages(self) -> list[BaseMessage]:
        return self._history.messages

    def snapshot(self) -> list[BaseMessage]:
        """Return a copy of the history, safe to hand to prompt builders."""
        return list(self._history.messages)

    async def add_messages(self, messages: list[BaseMessage]) -> None:
        await self._history.aadd_messages(messages)

    def __len__(self) -> int:
        return len(self._history.messages)

    def __repr__(self) -> str:
        return f"ConversationSession(session_id={self.session_id!r}, messages={len(self)})"


class SessionHistoryStore:
    """Task-safe map from session_id to ConversationSession."""

    def __init__(self) -> None:
        self._sessions: dict[str, ConversationSession] = {}
        self._lock = asyncio.Lock()

    async def get_or_create(self, session_id: str) -> ConversationSession:
        """
        Return the session for session_id, creating an empty one if unseen.

        Args:
            session_id: Validated session identifier

        Returns:
            ConversationSession: Exactly one instance per identifier
        """
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = ConversationSession(session_id)
                self._sessions[session_id] = session
                logger.info("Created session", extra={"session_id": session_id})
            return session

    def get(self, session_id: str) -> ConversationSession | None:
        """Return an existing session without creating one."""
        return self._sessions.get(session_id)

    async def append(self, session: ConversationSession, message: BaseMessage) -> None:
        """
        Append one message to the end of the session history.

        Args:
            session: Target session
            message: HumanMessage (user) or AIMessage (assistant)
        """
        await session.add_messages([message])

    async def append_exchange(self, session: ConversationSession, question: str, answer: str) -> None:
        """
        Append a user question and the assistant answer as one unit.

        Args:
            session: Target session
            question: Original user question
            answer: Full assistant answer
        """
        await session.add_messages([HumanMessage(content=question), AIMessage(content=answer)])
        logger.debug(
            "Committed exchange to history",
            extra={"session_id": session.session_id, "history_len": len(session)},
        )

    def session_ids(self) -> list[str]:
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
