"""
Constants and configuration values used throughout the application.

This module defines constants that are used across different parts of the application,
providing a centralized location for configuration values and making it easier to
maintain consistent naming throughout the codebase.
"""

# Logger name used throughout the application
LOGGER_NAME = "realtime_rag"

# Default Azure OpenAI realtime API version
DEFAULT_API_VERSION = "2024-10-01-preview"

# Audio defaults
AUDIO_FORMAT_PCM16 = "pcm16"
DEFAULT_INPUT_AUDIO_FILE = "user-question.pcm"
DEFAULT_OUTPUT_AUDIO_FILE = "assistant-response.pcm"
AUDIO_CHUNK_SIZE = 32 * 1024  # bytes per input_audio_buffer.append

# Search defaults
SEARCH_MAX_RESULTS = 5

# Client event types
EVENT_SESSION_UPDATE = "session.update"
EVENT_INPUT_AUDIO_APPEND = "input_audio_buffer.append"
EVENT_INPUT_AUDIO_COMMIT = "input_audio_buffer.commit"
EVENT_CONVERSATION_ITEM_CREATE = "conversation.item.create"
EVENT_RESPONSE_CREATE = "response.create"

# Server event types
EVENT_FUNCTION_CALL_ARGUMENTS_DELTA = "response.function_call_arguments.delta"
EVENT_AUDIO_DELTA = "response.audio.delta"
EVENT_AUDIO_TRANSCRIPT_DELTA = "response.audio_transcript.delta"
EVENT_OUTPUT_ITEM_DONE = "response.output_item.done"
EVENT_RESPONSE_DONE = "response.done"
EVENT_ERROR = "error"
