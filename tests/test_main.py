"""
Tests for the interactive CLI command parser.
"""
import pytest

from insight_agent.main import parse_command

COLUMNS = ["Product", "Sales", "Region"]


class TestParseCommand:
    """Tests for telling CLI commands apart from questions."""

    @pytest.mark.parametrize("text,expected", [
        ("stats", ("stats", None)),
        ("  PREVIEW ", ("preview", None)),
        ("chart bar", ("chart", "bar")),
        ("Chart Pie", ("chart", "pie")),
        ("outliers Sales", ("outliers", "Sales")),
    ])
    def test_commands(self, text, expected):
        """Test that bare commands and known arguments are recognised."""
        assert parse_command(text, COLUMNS) == expected

    @pytest.mark.parametrize("text", [
        "preview the data please",
        "stats for region?",
        "chart something nice",
        "outliers Revenue",
        "outliers",
        "What are the trends?",
    ])
    def test_questions_go_to_agent(self, text):
        """Test that questions starting with a command word are not commands."""
        assert parse_command(text, COLUMNS) is None
