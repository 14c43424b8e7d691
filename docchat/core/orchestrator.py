"""
Conversational RAG orchestrator.

Composes query rewriting, context retrieval and streaming answer
generation into one request-scoped pipeline and commits the exchange to
session history once the answer stream is fully drained.

Stage machine per request:
    REWRITING -> RETRIEVING -> GENERATING -> COMPLETED
    any stage -> FAILED

Only the GENERATING stage is visible to the caller. A failure or a
consumer disconnect after fragments have been delivered cannot recall
them: the caller sees a truncated answer and history is left untouched.

The session lock is held from rewriting until the stream is drained or
closed, including while the generator is paused at a fragment. A consumer
that reads slowly or stalls keeps every later request for the same
session waiting; no timeout bounds that wait.

Dependencies: docchat.core (rewriter, retriever, generator, session store)
System role: Request orchestration for the RAG pipeline
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass, field
from enum import Enum

from docchat.core.answer_generator import AnswerGenerator
from docchat.core.context_retriever import ContextRetriever
from docchat.core.query_rewriter import QueryRewriter
from docchat.core.session_store import SessionHistoryStore
from docchat.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    """Lifecycle states of a single request."""

    REWRITING = "rewriting"
    RETRIEVING = "retrieving"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PipelineRun:
    """Mutable record of one request moving through the pipeline."""

    session_id: str
    question: str
    stage: PipelineStage = PipelineStage.REWRITING
    standalone_question: str | None = None
    context: str | None = None
    answer_parts: list[str] = field(default_factory=list)
    error: BaseException | None = None

    @property
    def answer(self) -> str:
        return "".join(self.answer_parts)

    @property
    def fragments(self) -> int:
        return len(self.answer_parts)


class ConversationalRAGPipeline:
    """Request orchestrator holding references to app-scoped components."""

    def __init__(
        self,
        rewriter: QueryRewriter,
        retriever: ContextRetriever,
        generator: AnswerGenerator,
        session_store: SessionHistoryStore,
        on_stage: Callable[[PipelineRun], None] | None = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            rewriter: Query rewriter
            retriever: Context retriever bound to the built index
            generator: Streaming answer generator
            session_store: Shared session history store
            on_stage: Optional callback invoked after every stage transition
        """
        self.rewriter = rewriter
        self.retriever = retriever
        self.generator = generator
        self.session_store = session_store
        self._on_stage = on_stage

    def _transition(self, run: PipelineRun, stage: PipelineStage) -> None:
        run.stage = stage
        log_with_context(
            logger,
            logging.DEBUG,
            f"Pipeline stage -> {stage.value}",
            session_id=run.session_id,
            stage=stage.value,
        )
        if self._on_stage is not None:
            self._on_stage(run)

    async def respond(
        self,
        question: str,
        session_id: str,
        run: PipelineRun | None = None,
    ) -> AsyncGenerator[str, None]:
        """
        Run the pipeline and stream answer fragments.

        Requests for the same session are serialized by the session lock.

        Args:
            question: Original user question (already validated)
            session_id: Validated session identifier
            run: Optional run record to observe progress from the caller

        Yields:
            str: Answer fragments as produced by the model

        Raises:
            GenerationError: Rewrite or generation failed
            EmbeddingError: Query embedding failed
            StageTimeoutError: A stage exceeded its timeout
        """
        run = run or PipelineRun(session_id=session_id, question=question)
        self._transition(run, PipelineStage.REWRITING)

        session = await self.session_store.get_or_create(session_id)
        async with session.lock:
            history = session.snapshot()
            try:
                run.standalone_question = await self.rewriter.rewrite(history, question)

                self._transition(run, PipelineStage.RETRIEVING)
                run.context = await self.retriever.retrieve(run.standalone_question)

                self._transition(run, PipelineStage.GENERATING)
                stream = self.generator.generate(run.context, history, run.standalone_question)
                try:
                    async for fragment in stream:
                        run.answer_parts.append(fragment)
                        yield fragment
                finally:
                    await stream.aclose()
            except Exception as e:
                run.error = e
                self._transition(run, PipelineStage.FAILED)
                log_exception_with_context(
                    logger,
                    "Pipeline failed, history not updated",
                    e,
                    session_id=session_id,
                    fragments_sent=run.fragments,
                )
                raise
            except (asyncio.CancelledError, GeneratorExit) as e:
                run.error = e
                self._transition(run, PipelineStage.FAILED)
                log_with_context(
                    logger,
                    logging.WARNING,
                    "Pipeline abandoned by consumer, history not updated",
                    session_id=session_id,
                    fragments_sent=run.fragments,
                )
                raise

            await self.session_store.append_exchange(session, question, run.answer)
            self._transition(run, PipelineStage.COMPLETED)
            log_with_context(
                logger,
                logging.INFO,
                "Pipeline completed",
                session_id=session_id,
                fragments_sent=run.fragments,
                answer_len=len(run.answer),
                history_len=len(session),
            )
