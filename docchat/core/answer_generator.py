"""
Streaming answer generation.

Builds the grounded prompt (system instruction with context, prior
history, standalone question) and streams text fragments from the chat
model as they arrive. The returned async generator is one-shot and
forward-only; closing it early closes the upstream model stream.

Dependencies: langchain_core
System role: Third stage of the conversational RAG pipeline
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from docchat.core.exceptions import GenerationError, StageTimeoutError
from docchat.core.prompts import ANSWER_PROMPT

logger = logging.getLogger(__name__)


def content_to_text(content: Any) -> str:
    """Flatten message chunk content (str or list of parts) into text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content is not None else ""


class AnswerGenerator:
    """Stream grounded answers from a chat model."""

    def __init__(self, llm: BaseChatModel, timeout: float | None = None) -> None:
        """
        Initialize generator.

        Args:
            llm: Chat model used in streaming mode
            timeout: Maximum wait for each fragment in seconds (None = no limit)
        """
        self._llm = llm
        self._timeout = timeout

    async def build_messages(
        self,
        context: str,
        history: list[BaseMessage],
        standalone_question: str,
    ) -> list[BaseMessage]:
        """Render the answer prompt into chat messages."""
        prompt_value = await ANSWER_PROMPT.ainvoke({
            "context": context,
            "history": history,
            "standalone_question": standalone_question,
        })
        return prompt_value.to_messages()

    async def generate(
        self,
        context: str,
        history: list[BaseMessage],
        standalone_question: str,
    ) -> AsyncGenerator[str, None]:
        """
        Stream answer fragments.

        Args:
            context: Serialized context block (may be empty)
            history: Prior conversation, oldest first
            standalone_question: Rewritten question

        Yields:
            str: Non-empty text fragments in arrival order

        Raises:
            GenerationError: When the model fails before or during streaming
            StageTimeoutError: When the next fragment does not arrive in time
        """
        messages = await self.build_messages(context, history, standalone_question)

        try:
            stream = self._llm.astream(messages)
        except Exception as e:
            raise GenerationError(f"Answer generation failed to start: {e}", stage="generate") from e

        fragment_count = 0
        try:
            while True:
                try:
                    chunk = await asyncio.wait_for(stream.__anext__(), timeout=self._timeout)
                except StopAsyncIteration:
                    break
                except asyncio.TimeoutError as e:
                    raise StageTimeoutError("generate", self._timeout) from e
                except Exception as e:
                    raise GenerationError(
                        f"Answer generation failed after {fragment_count} fragments: {e}",
                        stage="generate",
                        details={"fragments": fragment_count},
                    ) from e

                text = content_to_text(chunk.content)
                if text:
                    fragment_count += 1
                    yield text
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
            logger.debug("Answer stream closed", extra={"fragments": fragment_count})
