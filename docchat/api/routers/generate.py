"""
Streaming answer endpoint.

Routes: POST /generate

Body ``{"question": "...", "session_id": "..."}``; responds with a chunked
``text/plain`` stream of the answer. The first fragment is awaited before
the response starts, so validation, readiness, rewrite and retrieval
failures are reported as JSON errors. A failure after streaming began
cannot change the status line: the body simply ends early and the
truncated answer is not recorded in history.

Dependencies: fastapi, docchat.application.services.chat_service
System role: Streaming chat HTTP API
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from docchat.api.deps import get_chat_service
from docchat.api.error_handling import error_response
from docchat.application.services.chat_service import ChatService
from docchat.core.exceptions import DocChatException
from docchat.models.chat import GenerateRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generate"])

MEDIA_TYPE = "text/plain; charset=utf-8"


@router.post("/generate")
async def generate(
    request: GenerateRequest,
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Stream an answer to a question within a session.

    Args:
        request: Question and session identifier
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: Plain-text answer stream, or a JSON error
    """
    try:
        fragments = chat_service.respond(request.question, request.session_id)
    except DocChatException as e:
        return error_response(e)

    try:
        first = await fragments.__anext__()
    except StopAsyncIteration:
        first = b""
    except DocChatException as e:
        await fragments.aclose()
        return error_response(e)

    return StreamingResponse(_forward(first, fragments), media_type=MEDIA_TYPE)


async def _forward(first: bytes, fragments: AsyncGenerator[bytes, None]) -> AsyncGenerator[bytes, None]:
    try:
        if first:
            yield first
        async for fragment in fragments:
            yield fragment
    except DocChatException as e:
        logger.warning(
            "Answer stream truncated",
            extra={"error_type": type(e).__name__, "error_msg": str(e)},
        )
    finally:
        await fragments.aclose()
