"""
History-aware query rewriting.

Turns a follow-up question into a standalone question using the
conversation so far. Single attempt, non-streaming: the call resolves to
exactly one line of text or fails with GenerationError.

Dependencies: langchain_core (prompt | chat model | StrOutputParser)
System role: First stage of the conversational RAG pipeline
"""

import asyncio
import logging
import re

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.output_parsers import StrOutputParser

from docchat.core.exceptions import GenerationError, StageTimeoutError
from docchat.core.prompts import REPHRASE_QUESTION_PROMPT

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_QUOTES = "\"'`“”‘’"


def normalize_rewrite(text: str) -> str:
    """Collapse model output to one line and drop wrapping quotes."""
    line = _WHITESPACE_RE.sub(" ", text).strip()
    if len(line) >= 2 and line[0] in _QUOTES and line[-1] in _QUOTES:
        line = line[1:-1].strip()
    return line


class QueryRewriter:
    """Rephrase follow-up questions as standalone questions."""

    def __init__(
        self,
        llm: BaseChatModel,
        timeout: float | None = None,
        rewrite_empty_history: bool = False,
    ) -> None:
        """
        Initialize rewriter.

        Args:
            llm: Chat model used in non-streaming mode
            timeout: Seconds before the call fails with StageTimeoutError (None = no limit)
            rewrite_empty_history: Call the model even with no prior conversation
        """
        self._chain = REPHRASE_QUESTION_PROMPT | llm | StrOutputParser()
        self._timeout = timeout
        self._rewrite_empty_history = rewrite_empty_history

    async def rewrite(self, history: list[BaseMessage], question: str) -> str:
        """
        Produce a standalone question.

        Args:
            history: Prior conversation, oldest first
            question: New user question

        Returns:
            str: Single-line standalone question

        Raises:
            GenerationError: When the model call fails
            StageTimeoutError: When the call exceeds the timeout
        """
        if not history and not self._rewrite_empty_history:
            return question.strip()

        try:
            raw = await asyncio.wait_for(
                self._chain.ainvoke({"history": history, "question": question}),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise StageTimeoutError("rewrite", self._timeout) from e
        except Exception as e:
            raise GenerationError(f"Question rewrite failed: {e}", stage="rewrite") from e

        standalone = normalize_rewrite(raw)
        if not standalone:
            logger.warning("Rewriter returned empty output, falling back to original question")
            return question.strip()

        logger.debug(
            "Rewrote question",
            extra={"history_len": len(history), "standalone_question": standalone},
        )
        return standalone
