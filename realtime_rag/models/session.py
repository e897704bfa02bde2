"""
Pydantic models for the messages the client sends to the realtime session.

This module provides type-safe models for session configuration, tool
declarations and conversation items, each able to render itself as the
client event that carries it.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from realtime_rag.config.constants import (
    AUDIO_FORMAT_PCM16,
    EVENT_CONVERSATION_ITEM_CREATE,
    EVENT_SESSION_UPDATE,
)

DEFAULT_INSTRUCTIONS = """\
You are a helpful voice-enabled customer assistant for a sports store.
As the voice assistant, you answer questions very succinctly and friendly. Do not enumerate any items and be brief.
Only answer questions based on information available in the product search, accessible via the 'search' tool.
Always use the 'search' tool before answering a question about products.
If the 'search' tool does not yield any product results, respond that you are unable to answer the given question.
"""


class FunctionTool(BaseModel):
    """A function the model may call during the conversation."""
    type: Literal["function"] = "function"
    name: str
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)


class TurnDetection(BaseModel):
    """Server-side voice activity detection settings."""
    type: Literal["server_vad"] = "server_vad"
    threshold: Optional[float] = None
    prefix_padding_ms: Optional[int] = None
    silence_duration_ms: Optional[int] = None


class SessionOptions(BaseModel):
    """Options sent with session.update."""
    instructions: str = DEFAULT_INSTRUCTIONS
    tools: List[FunctionTool] = Field(default_factory=list)
    tool_choice: str = "auto"
    input_audio_format: str = AUDIO_FORMAT_PCM16
    output_audio_format: str = AUDIO_FORMAT_PCM16
    # The realtime API rejects temperatures below 0.6
    temperature: float = Field(0.6, ge=0.6, le=1.2)
    voice: Optional[str] = None
    turn_detection: Optional[TurnDetection] = Field(default_factory=TurnDetection)

    def to_event(self) -> Dict[str, Any]:
        session = self.model_dump(exclude_none=True)
        if self.turn_detection is None:
            session["turn_detection"] = None
        return {"type": EVENT_SESSION_UPDATE, "session": session}


class FunctionCallOutputItem(BaseModel):
    """The result of a function call, reported back to the conversation."""
    type: Literal["function_call_output"] = "function_call_output"
    call_id: str
    output: str

    def to_event(self) -> Dict[str, Any]:
        return {"type": EVENT_CONVERSATION_ITEM_CREATE, "item": self.model_dump()}
