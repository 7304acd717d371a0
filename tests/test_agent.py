"""
Tests for the chat agent transcript and processing guard.
"""
import asyncio

import pytest

from insight_agent.agent import GREETING, ChatAgent
from insight_agent.exceptions import QueryInProgress


class TestChatAgent:
    """Tests for ChatAgent."""

    def test_greeting(self):
        """Test that a new transcript starts with the greeting."""
        agent = ChatAgent()

        assert len(agent.history) == 1
        assert agent.history[0].role == "ai"
        assert agent.history[0].content == GREETING

    def test_ask_appends_in_order(self, sales_dataset):
        """Test that the question and answer are appended in order."""
        agent = ChatAgent(dataset=sales_dataset, response_delay=0)
        answer = agent.ask_sync("Generate a summary report")

        assert "Rows: 3" in answer
        assert [m.role for m in agent.history] == ["ai", "user", "ai"]
        assert agent.history[1].content == "Generate a summary report"
        assert agent.history[2].content == answer
        assert agent.processing is False

    def test_blank_question_ignored(self):
        """Test that a blank question leaves the transcript alone."""
        agent = ChatAgent(response_delay=0)

        assert agent.ask_sync("   ") is None
        assert len(agent.history) == 1

    def test_concurrent_question_rejected(self, sales_dataset):
        """Test that a second question is refused while one is pending."""
        agent = ChatAgent(dataset=sales_dataset, response_delay=0.05)

        async def scenario():
            first = asyncio.ensure_future(agent.ask("chart please"))
            await asyncio.sleep(0)
            assert agent.processing is True
            with pytest.raises(QueryInProgress):
                await agent.ask("summary")
            return await first

        answer = asyncio.run(scenario())

        assert "visualizations" in answer
        assert [m.content for m in agent.history[1:]] == ["chart please", answer]
        assert agent.processing is False

    def test_answer_without_dataset(self):
        """Test that answering without a dataset uses placeholders."""
        agent = ChatAgent()

        assert '"current dataset"' in agent.answer("hello")
