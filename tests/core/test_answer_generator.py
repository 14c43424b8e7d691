"""
Test suite for streaming answer generation.

Tests prompt assembly, fragment streaming, error wrapping mid-stream,
per-fragment timeout and upstream closing on early exit.

System role: Verification of the third pipeline stage
"""

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from docchat.core.answer_generator import AnswerGenerator, content_to_text
from docchat.core.exceptions import GenerationError, StageTimeoutError

from fakes import ContextEchoChatModel, ScriptedChatModel

SKY_CONTEXT = "<doc>\nThe sky is blue.\n</doc>"


async def collect(stream) -> list[str]:
    return [fragment async for fragment in stream]


class TestContentToText:
    """Test suite for content_to_text."""

    def test_should_pass_strings_through(self) -> None:
        assert content_to_text("blue") == "blue"

    def test_should_join_text_parts(self) -> None:
        assert content_to_text(["The sky ", {"type": "text", "text": "is blue."}]) == "The sky is blue."

    def test_should_map_none_to_empty(self) -> None:
        assert content_to_text(None) == ""


class TestAnswerGenerator:
    """Test suite for AnswerGenerator.generate."""

    @pytest.mark.asyncio
    async def test_build_messages_should_order_system_history_question(self) -> None:
        """Test prompt contains context, prior turns and the standalone question."""
        # Arrange
        generator = AnswerGenerator(ScriptedChatModel())
        history = [HumanMessage(content="Hi"), AIMessage(content="Hello")]

        # Act
        messages = await generator.build_messages(SKY_CONTEXT, history, "What color is the sky?")

        # Assert
        assert isinstance(messages[0], SystemMessage)
        assert SKY_CONTEXT in messages[0].content
        assert messages[1:3] == history
        assert messages[-1].content.endswith("What color is the sky?")

    @pytest.mark.asyncio
    async def test_generate_should_stream_fragments_in_order(self) -> None:
        """Test fragments arrive in model order and concatenate to the answer."""
        # Arrange
        llm = ScriptedChatModel(responses=["The sky is blue."])
        generator = AnswerGenerator(llm)

        # Act
        fragments = await collect(generator.generate(SKY_CONTEXT, [], "What color is the sky?"))

        # Assert
        assert fragments == ["The ", "sky ", "is ", "blue."]
        assert "".join(fragments) == "The sky is blue."

    @pytest.mark.asyncio
    async def test_generate_should_answer_from_context(self) -> None:
        """Test the context reaches the model through the system prompt."""
        # Arrange
        generator = AnswerGenerator(ContextEchoChatModel())

        # Act
        answer = "".join(await collect(generator.generate(SKY_CONTEXT, [], "What color is the sky?")))

        # Assert
        assert "blue" in answer

    @pytest.mark.asyncio
    async def test_generate_with_empty_context_should_still_call_model(self) -> None:
        """Test an empty context block does not short-circuit generation."""
        # Arrange
        llm = ContextEchoChatModel()
        generator = AnswerGenerator(llm)

        # Act
        answer = "".join(await collect(generator.generate("", [], "What color is the sky?")))

        # Assert
        assert answer == "I could not find that in the document."
        assert len(llm.calls) == 1

    @pytest.mark.asyncio
    async def test_failure_before_first_fragment_should_raise_generation_error(self) -> None:
        """Test an immediate provider error is wrapped as GenerationError."""
        # Arrange
        generator = AnswerGenerator(ScriptedChatModel(error=RuntimeError("boom")))

        # Act / Assert
        with pytest.raises(GenerationError) as exc_info:
            await collect(generator.generate(SKY_CONTEXT, [], "q"))

        assert exc_info.value.stage == "generate"

    @pytest.mark.asyncio
    async def test_failure_mid_stream_should_raise_after_partial_output(self) -> None:
        """Test fragments delivered before the failure are not recalled."""
        # Arrange
        llm = ScriptedChatModel(
            responses=["The sky is blue."],
            error=RuntimeError("connection reset"),
            fail_after=2,
        )
        generator = AnswerGenerator(llm)
        received: list[str] = []

        # Act
        with pytest.raises(GenerationError) as exc_info:
            async for fragment in generator.generate(SKY_CONTEXT, [], "q"):
                received.append(fragment)

        # Assert
        assert received == ["The ", "sky "]
        assert exc_info.value.details["fragments"] == 2

    @pytest.mark.asyncio
    async def test_slow_fragment_should_raise_stage_timeout(self) -> None:
        """Test a fragment exceeding the timeout raises StageTimeoutError."""
        # Arrange
        generator = AnswerGenerator(ScriptedChatModel(responses=["slow answer"], delay=1.0), timeout=0.05)

        # Act / Assert
        with pytest.raises(StageTimeoutError) as exc_info:
            await collect(generator.generate(SKY_CONTEXT, [], "q"))

        assert exc_info.value.stage == "generate"

    @pytest.mark.asyncio
    async def test_closing_early_should_stop_generation(self) -> None:
        """Test closing the stream after one fragment ends iteration cleanly."""
        # Arrange
        generator = AnswerGenerator(ScriptedChatModel(responses=["one two three four"]))
        stream = generator.generate(SKY_CONTEXT, [], "q")

        # Act
        first = await stream.__anext__()
        await stream.aclose()

        # Assert
        assert first == "one "
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()
