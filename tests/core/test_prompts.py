"""
Test suite for prompt templates.

Tests rewrite and answer prompt structure and variable substitution.

System role: Verification of prompt templates
"""

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from docchat.core.prompts import ANSWER_PROMPT, REPHRASE_QUESTION_PROMPT


@pytest.fixture
def history() -> list:
    """Provide a one-exchange conversation."""
    return [HumanMessage(content="What color is the sky?"), AIMessage(content="Blue.")]


class TestRephrasePrompt:
    """Test suite for REPHRASE_QUESTION_PROMPT."""

    def test_prompt_should_require_history_and_question(self) -> None:
        """Test template input variables."""
        assert set(REPHRASE_QUESTION_PROMPT.input_variables) == {"history", "question"}

    def test_prompt_should_place_history_between_system_and_question(self, history: list) -> None:
        """Test rendered order: system, prior turns, rephrase request."""
        # Act
        messages = REPHRASE_QUESTION_PROMPT.invoke({"history": history, "question": "And the grass?"}).to_messages()

        # Assert
        assert isinstance(messages[0], SystemMessage)
        assert messages[1:3] == history
        assert isinstance(messages[-1], HumanMessage)
        assert messages[-1].content.endswith("standalone question:\nAnd the grass?")


class TestAnswerPrompt:
    """Test suite for ANSWER_PROMPT."""

    def test_prompt_should_embed_context_in_system_message(self, history: list) -> None:
        """Test context block appears inside the context delimiters."""
        # Act
        messages = ANSWER_PROMPT.invoke({
            "context": "<doc>\nThe sky is blue.\n</doc>",
            "history": history,
            "standalone_question": "What color is the grass?",
        }).to_messages()

        # Assert
        system = messages[0]
        assert isinstance(system, SystemMessage)
        assert "<context>\n<doc>\nThe sky is blue.\n</doc>\n</context>" in system.content
        assert "only the resources provided" in system.content
        assert messages[1:3] == history
        assert messages[-1].content.endswith("What color is the grass?")

    def test_prompt_should_keep_braces_in_context_verbatim(self) -> None:
        """Test context text containing braces is not treated as a template."""
        # Act
        messages = ANSWER_PROMPT.invoke({
            "context": "<doc>\nf(x) = {x}\n</doc>",
            "history": [],
            "standalone_question": "What is f?",
        }).to_messages()

        # Assert
        assert "f(x) = {x}" in messages[0].content
        assert len(messages) == 2
