"""
Pydantic models for the updates produced by a realtime conversation session.

Each server event that matters to the client is translated into exactly one
Update variant. The variants form a discriminated union on the ``type`` field,
which the dispatcher uses to route updates to their handlers.
"""

import base64
import binascii
import logging
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from realtime_rag.config.constants import (
    EVENT_AUDIO_DELTA,
    EVENT_AUDIO_TRANSCRIPT_DELTA,
    EVENT_ERROR,
    EVENT_FUNCTION_CALL_ARGUMENTS_DELTA,
    EVENT_OUTPUT_ITEM_DONE,
    EVENT_RESPONSE_DONE,
    LOGGER_NAME,
)

logger = logging.getLogger(LOGGER_NAME)

# Update type tags
UPDATE_FUNCTION_CALL_ARGUMENTS_DELTA = "function_call_arguments.delta"
UPDATE_AUDIO_DELTA = "audio.delta"
UPDATE_OUTPUT_TRANSCRIPT_DELTA = "output_transcript.delta"
UPDATE_ITEM_FINISHED = "item.finished"
UPDATE_RESPONSE_FINISHED = "response.finished"
UPDATE_ERROR = "error"


class FunctionCallArgumentsDelta(BaseModel):
    """A fragment of the JSON arguments of a streamed function call."""
    type: Literal["function_call_arguments.delta"] = UPDATE_FUNCTION_CALL_ARGUMENTS_DELTA
    call_id: str
    delta: str = ""


class AudioDelta(BaseModel):
    """A chunk of assistant audio."""
    type: Literal["audio.delta"] = UPDATE_AUDIO_DELTA
    delta: Optional[bytes] = None


class OutputTranscriptDelta(BaseModel):
    """A fragment of the transcript of the assistant audio."""
    type: Literal["output_transcript.delta"] = UPDATE_OUTPUT_TRANSCRIPT_DELTA
    delta: str = ""


class ItemFinished(BaseModel):
    """An output item finished streaming; function calls carry their id and name."""
    type: Literal["item.finished"] = UPDATE_ITEM_FINISHED
    function_call_id: Optional[str] = None
    function_name: Optional[str] = None


class CreatedItem(BaseModel):
    """An item created during a response turn."""
    item_id: Optional[str] = None
    function_call_id: Optional[str] = None


class ResponseFinished(BaseModel):
    """The model finished its response turn."""
    type: Literal["response.finished"] = UPDATE_RESPONSE_FINISHED
    created_items: List[CreatedItem] = Field(default_factory=list)

    @property
    def has_function_calls(self) -> bool:
        return any(item.function_call_id is not None for item in self.created_items)


class ErrorUpdate(BaseModel):
    """The session reported an error."""
    type: Literal["error"] = UPDATE_ERROR
    details: Dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        code = self.details.get("code") or self.details.get("type") or "unknown"
        message = self.details.get("message") or ""
        return f"{code}: {message}" if message else str(code)


Update = Annotated[
    Union[
        FunctionCallArgumentsDelta,
        AudioDelta,
        OutputTranscriptDelta,
        ItemFinished,
        ResponseFinished,
        ErrorUpdate,
    ],
    Field(discriminator="type"),
]


def _decode_audio(data: Optional[str]) -> Optional[bytes]:
    if not data:
        return None
    try:
        return base64.b64decode(data)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"Could not decode audio delta: {e}")
        return None


def _parse_function_call_arguments_delta(event: Dict[str, Any]) -> Update:
    return FunctionCallArgumentsDelta(call_id=event["call_id"], delta=event.get("delta") or "")


def _parse_audio_delta(event: Dict[str, Any]) -> Update:
    return AudioDelta(delta=_decode_audio(event.get("delta")))


def _parse_audio_transcript_delta(event: Dict[str, Any]) -> Update:
    return OutputTranscriptDelta(delta=event.get("delta") or "")


def _parse_output_item_done(event: Dict[str, Any]) -> Update:
    item = event.get("item") or {}
    if item.get("type") != "function_call":
        return ItemFinished()
    return ItemFinished(function_call_id=item.get("call_id"), function_name=item.get("name"))


def _parse_response_done(event: Dict[str, Any]) -> Update:
    response = event.get("response") or {}
    created_items = [
        CreatedItem(item_id=item.get("id"), function_call_id=item.get("call_id"))
        for item in response.get("output") or []
    ]
    return ResponseFinished(created_items=created_items)


def _parse_error(event: Dict[str, Any]) -> Update:
    return ErrorUpdate(details=event.get("error") or {})


SERVER_EVENT_PARSERS = {
    EVENT_FUNCTION_CALL_ARGUMENTS_DELTA: _parse_function_call_arguments_delta,
    EVENT_AUDIO_DELTA: _parse_audio_delta,
    EVENT_AUDIO_TRANSCRIPT_DELTA: _parse_audio_transcript_delta,
    EVENT_OUTPUT_ITEM_DONE: _parse_output_item_done,
    EVENT_RESPONSE_DONE: _parse_response_done,
    EVENT_ERROR: _parse_error,
}


def parse_server_event(event: Dict[str, Any]) -> Optional[Update]:
    """
    Translate a decoded realtime server event into an Update.

    Args:
        event: The JSON-decoded server event

    Returns:
        The matching Update, or None for event types the client does not track
    """
    event_type = event.get("type")
    parser = SERVER_EVENT_PARSERS.get(event_type)
    if parser is None:
        logger.debug(f"Ignoring server event of type: {event_type or 'unknown'}")
        return None
    return parser(event)
