"""
Unit tests for the session update models and server event parsing.
"""

import base64

import pytest
from pydantic import TypeAdapter, ValidationError

from realtime_rag.models.updates import (
    AudioDelta,
    CreatedItem,
    ErrorUpdate,
    FunctionCallArgumentsDelta,
    ItemFinished,
    OutputTranscriptDelta,
    ResponseFinished,
    Update,
    parse_server_event,
)


class TestParseServerEvent:
    """Tests for mapping realtime server events onto updates."""

    def test_function_call_arguments_delta(self):
        update = parse_server_event({
            "type": "response.function_call_arguments.delta",
            "call_id": "call_1",
            "delta": '{"query":',
        })
        assert update == FunctionCallArgumentsDelta(call_id="call_1", delta='{"query":')

    def test_function_call_arguments_delta_without_call_id(self):
        with pytest.raises(KeyError):
            parse_server_event({"type": "response.function_call_arguments.delta", "delta": "x"})

    def test_audio_delta_is_decoded(self):
        update = parse_server_event({
            "type": "response.audio.delta",
            "delta": base64.b64encode(b"\x01\x02\x03").decode("ascii"),
        })
        assert isinstance(update, AudioDelta)
        assert update.delta == b"\x01\x02\x03"

    def test_empty_audio_delta(self):
        update = parse_server_event({"type": "response.audio.delta", "delta": ""})
        assert isinstance(update, AudioDelta)
        assert update.delta is None

    def test_invalid_audio_delta(self):
        update = parse_server_event({"type": "response.audio.delta", "delta": "not base64!"})
        assert update.delta is None

    def test_audio_transcript_delta(self):
        update = parse_server_event({"type": "response.audio_transcript.delta", "delta": "Hello"})
        assert update == OutputTranscriptDelta(delta="Hello")

    def test_function_call_item_done(self):
        update = parse_server_event({
            "type": "response.output_item.done",
            "item": {"id": "item_1", "type": "function_call", "call_id": "call_1", "name": "search"},
        })
        assert update == ItemFinished(function_call_id="call_1", function_name="search")

    def test_message_item_done(self):
        update = parse_server_event({
            "type": "response.output_item.done",
            "item": {"id": "item_2", "type": "message", "role": "assistant"},
        })
        assert update == ItemFinished()

    def test_response_done_with_function_call(self):
        update = parse_server_event({
            "type": "response.done",
            "response": {
                "output": [
                    {"id": "item_1", "type": "function_call", "call_id": "call_1"},
                ]
            },
        })
        assert isinstance(update, ResponseFinished)
        assert update.created_items == [CreatedItem(item_id="item_1", function_call_id="call_1")]
        assert update.has_function_calls

    def test_response_done_with_message_only(self):
        update = parse_server_event({
            "type": "response.done",
            "response": {"output": [{"id": "item_2", "type": "message"}]},
        })
        assert not update.has_function_calls

    def test_response_done_without_output(self):
        update = parse_server_event({"type": "response.done", "response": {}})
        assert update.created_items == []
        assert not update.has_function_calls

    def test_error(self):
        update = parse_server_event({
            "type": "error",
            "error": {"type": "invalid_request_error", "code": "bad_value", "message": "Nope"},
        })
        assert isinstance(update, ErrorUpdate)
        assert update.details["code"] == "bad_value"
        assert str(update) == "bad_value: Nope"

    @pytest.mark.parametrize("event_type", [
        "session.created",
        "response.created",
        "response.audio.done",
        "input_audio_buffer.speech_started",
    ])
    def test_untracked_events_are_ignored(self, event_type):
        assert parse_server_event({"type": event_type}) is None

    def test_event_without_type_is_ignored(self):
        assert parse_server_event({}) is None


class TestUpdateUnion:
    """Tests for the discriminated Update union."""

    def test_validate_by_type_tag(self):
        adapter = TypeAdapter(Update)
        update = adapter.validate_python({"type": "item.finished", "function_call_id": "call_1"})
        assert isinstance(update, ItemFinished)
        assert update.function_call_id == "call_1"

    def test_unknown_type_tag(self):
        with pytest.raises(ValidationError):
            TypeAdapter(Update).validate_python({"type": "unknown"})

    def test_error_update_str_without_message(self):
        assert str(ErrorUpdate(details={"type": "server_error"})) == "server_error"
        assert str(ErrorUpdate()) == "unknown"
