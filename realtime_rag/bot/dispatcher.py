"""
Dispatcher for the updates of a realtime conversation session.

The SessionUpdateDispatcher drains the update stream of a session one update
at a time and routes each one by its type:
- audio deltas are appended to the audio sink
- transcript deltas are written to the transcript sink
- function call argument deltas are accumulated per call id
- finished function call items are executed and their result is added to the
  conversation
- finished responses either short-circuit into a new model turn (when the turn
  called a tool) or end the conversation
- errors are reported and end the conversation
"""

import enum
import logging
import sys
from typing import AsyncIterable, Awaitable, BinaryIO, Callable, Dict, Optional, Protocol, TextIO

from realtime_rag.bot.tools import ToolExecutor
from realtime_rag.config.constants import LOGGER_NAME
from realtime_rag.errors import MalformedToolArguments
from realtime_rag.models.pending_calls import PendingFunctionCalls
from realtime_rag.models.session import FunctionCallOutputItem
from realtime_rag.models.updates import (
    UPDATE_AUDIO_DELTA,
    UPDATE_ERROR,
    UPDATE_FUNCTION_CALL_ARGUMENTS_DELTA,
    UPDATE_ITEM_FINISHED,
    UPDATE_OUTPUT_TRANSCRIPT_DELTA,
    UPDATE_RESPONSE_FINISHED,
    AudioDelta,
    ErrorUpdate,
    FunctionCallArgumentsDelta,
    ItemFinished,
    OutputTranscriptDelta,
    ResponseFinished,
    Update,
)

logger = logging.getLogger(LOGGER_NAME)


class DispatchOutcome(str, enum.Enum):
    """How a dispatch run ended."""
    COMPLETED = "completed"
    ERROR = "error"
    STREAM_CLOSED = "stream_closed"


class ConversationSession(Protocol):
    async def add_item(self, item: FunctionCallOutputItem) -> None:
        ...

    async def start_new_turn(self) -> None:
        ...


# A handler returns an outcome to stop the loop, or None to keep going
HandlerFunc = Callable[[Update], Awaitable[Optional[DispatchOutcome]]]


class SessionUpdateDispatcher:
    """
    Routes session updates to the audio, transcript and tool call handlers.

    The dispatcher is single-task: each update, including any tool call it
    triggers, is fully processed before the next one is pulled.
    """

    def __init__(
        self,
        session: ConversationSession,
        tool_executor: ToolExecutor,
        audio_sink: BinaryIO,
        transcript_sink: Optional[TextIO] = None,
        diagnostic_sink: Optional[TextIO] = None,
    ):
        self.session = session
        self.tool_executor = tool_executor
        self.audio_sink = audio_sink
        self.transcript_sink = transcript_sink if transcript_sink is not None else sys.stdout
        self.diagnostic_sink = diagnostic_sink if diagnostic_sink is not None else sys.stderr
        self.pending_calls = PendingFunctionCalls()
        self.last_error: Optional[ErrorUpdate] = None
        self.audio_bytes_written = 0

        self.handlers: Dict[str, HandlerFunc] = {
            UPDATE_FUNCTION_CALL_ARGUMENTS_DELTA: self.handle_function_call_arguments_delta,
            UPDATE_AUDIO_DELTA: self.handle_audio_delta,
            UPDATE_OUTPUT_TRANSCRIPT_DELTA: self.handle_output_transcript_delta,
            UPDATE_ITEM_FINISHED: self.handle_item_finished,
            UPDATE_RESPONSE_FINISHED: self.handle_response_finished,
            UPDATE_ERROR: self.handle_error,
        }

    async def run(self, updates: AsyncIterable[Update]) -> DispatchOutcome:
        """
        Consume updates until the conversation ends.

        Args:
            updates: The session's update stream

        Returns:
            DispatchOutcome: COMPLETED when the model answered, ERROR on an error
            update, STREAM_CLOSED if the stream ended first
        """
        async for update in updates:
            handler = self.handlers.get(update.type)
            if handler is None:
                logger.debug(f"No handler for update type: {update.type}")
                continue
            outcome = await handler(update)
            if outcome is not None:
                logger.info(f"Dispatch finished: {outcome.value}")
                return outcome

        logger.warning("Update stream ended before the response finished")
        return DispatchOutcome.STREAM_CLOSED

    async def handle_function_call_arguments_delta(
        self, update: FunctionCallArgumentsDelta
    ) -> Optional[DispatchOutcome]:
        self.pending_calls.append(update.call_id, update.delta)
        return None

    async def handle_audio_delta(self, update: AudioDelta) -> Optional[DispatchOutcome]:
        if update.delta:
            self.audio_sink.write(update.delta)
            self.audio_bytes_written += len(update.delta)
        return None

    async def handle_output_transcript_delta(
        self, update: OutputTranscriptDelta
    ) -> Optional[DispatchOutcome]:
        self.transcript_sink.write(update.delta)
        self.transcript_sink.flush()
        return None

    async def handle_item_finished(self, update: ItemFinished) -> Optional[DispatchOutcome]:
        call_id = update.function_call_id
        if call_id is None or not self.pending_calls.has_arguments(call_id):
            return None

        arguments = self.pending_calls.get(call_id)
        logger.info(f" -> Invoking: {update.function_name}({arguments})")
        try:
            result = await self.tool_executor.invoke(update.function_name, arguments)
        except MalformedToolArguments as e:
            logger.error(f"Skipping tool call {call_id}: {e}", exc_info=True)
            result = ""
        finally:
            self.pending_calls.reset(call_id)

        if result:
            await self.session.add_item(FunctionCallOutputItem(call_id=call_id, output=result))
        return None

    async def handle_response_finished(self, update: ResponseFinished) -> Optional[DispatchOutcome]:
        if update.has_function_calls:
            logger.info(" -> Short circuit the client turn due to function invocation")
            await self.session.start_new_turn()
            return None
        return DispatchOutcome.COMPLETED

    async def handle_error(self, update: ErrorUpdate) -> Optional[DispatchOutcome]:
        self.last_error = update
        logger.error(f"Received error from realtime session: {update.details}")
        print(f"Error! {update}", file=self.diagnostic_sink)
        return DispatchOutcome.ERROR
