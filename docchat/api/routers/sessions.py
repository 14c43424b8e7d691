"""
Session history API endpoints.

Routes: GET /sessions/{session_id}/history

Dependencies: docchat.application.services.chat_service
System role: Read-only conversation history HTTP API
"""

from fastapi import APIRouter, Depends

from docchat.api.deps import get_chat_service
from docchat.application.services.chat_service import ChatService
from docchat.models.chat import ChatHistoryResponse

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("/{session_id}/history", response_model=ChatHistoryResponse)
async def get_history(
    session_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryResponse:
    """
    Return the ordered conversation history of a session.

    Raises:
        SessionNotFoundError: Mapped to 404 for sessions never used
    """
    return chat_service.get_history(session_id)
