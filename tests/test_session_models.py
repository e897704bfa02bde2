"""
Unit tests for the outgoing session message models.
"""

import pytest
from pydantic import ValidationError

from realtime_rag.bot.tools import SEARCH_TOOL
from realtime_rag.models.session import (
    DEFAULT_INSTRUCTIONS,
    FunctionCallOutputItem,
    SessionOptions,
)


class TestSessionOptions:
    """Tests for the session.update message."""

    def test_default_event(self):
        event = SessionOptions(tools=[SEARCH_TOOL]).to_event()

        assert event["type"] == "session.update"
        session = event["session"]
        assert session["instructions"] == DEFAULT_INSTRUCTIONS
        assert session["input_audio_format"] == "pcm16"
        assert session["output_audio_format"] == "pcm16"
        assert session["turn_detection"] == {"type": "server_vad"}
        assert "voice" not in session
        assert session["tools"] == [{
            "type": "function",
            "name": "search",
            "description": "Search the product catalog for product information",
            "parameters": SEARCH_TOOL.parameters,
        }]

    def test_disabled_turn_detection_is_sent_as_null(self):
        event = SessionOptions(turn_detection=None).to_event()
        assert "turn_detection" in event["session"]
        assert event["session"]["turn_detection"] is None

    def test_temperature_bounds(self):
        with pytest.raises(ValidationError):
            SessionOptions(temperature=0)
        assert SessionOptions(temperature=0.8).temperature == 0.8

    def test_instructions_mention_search_tool(self):
        assert "'search' tool" in DEFAULT_INSTRUCTIONS


class TestFunctionCallOutputItem:
    """Tests for the conversation.item.create message."""

    def test_to_event(self):
        item = FunctionCallOutputItem(call_id="call_1", output="Total results: 0\n")

        assert item.to_event() == {
            "type": "conversation.item.create",
            "item": {
                "type": "function_call_output",
                "call_id": "call_1",
                "output": "Total results: 0\n",
            },
        }

    def test_requires_call_id(self):
        with pytest.raises(ValidationError):
            FunctionCallOutputItem(output="x")
