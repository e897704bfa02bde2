"""
Orchestration of one realtime conversation grounded in product search.

This module wires the realtime session, the product search client and the
update dispatcher together: it configures the session with the search tool,
streams the recorded user question, and dispatches updates until the
assistant has answered.
"""

import logging
import sys
from typing import Optional, TextIO

from azure.core.exceptions import AzureError

from realtime_rag.bot.dispatcher import DispatchOutcome, SessionUpdateDispatcher
from realtime_rag.bot.realtime_api import RealtimeConversationSession
from realtime_rag.bot.tools import ToolExecutor
from realtime_rag.config.constants import LOGGER_NAME
from realtime_rag.config.settings import Settings
from realtime_rag.errors import RealtimeRagError, SessionError
from realtime_rag.models.session import SessionOptions
from realtime_rag.services.search import ProductSearchClient

logger = logging.getLogger(LOGGER_NAME)


async def run_conversation(
    settings: Settings,
    options: Optional[SessionOptions] = None,
    transcript_sink: Optional[TextIO] = None,
) -> DispatchOutcome:
    """
    Run a single conversation turn from the recorded question to the spoken answer.

    Args:
        settings: Validated runtime settings
        options: Session options; defaults to the store assistant instructions
        transcript_sink: Where the assistant transcript is written (default stdout)

    Returns:
        DispatchOutcome: COMPLETED or STREAM_CLOSED

    Raises:
        SessionError: If the session reported an error update
        SessionConnectionError: If the realtime session could not be used
        UnsupportedTool: If the model called a tool this client does not provide
    """
    async with ProductSearchClient(
        endpoint=settings.search_endpoint,
        index_name=settings.search_index,
        api_key=settings.search_api_key,
    ) as search_client:
        executor = ToolExecutor(search_client)
        if options is None:
            options = SessionOptions(tools=executor.tools)

        async with RealtimeConversationSession(
            endpoint=settings.openai_endpoint,
            api_key=settings.openai_api_key,
            deployment=settings.deployment,
            api_version=settings.api_version,
        ) as session:
            await session.configure(options)

            logger.info(f"Sending input audio from {settings.input_audio_path}")
            with open(settings.input_audio_path, "rb") as input_audio:
                await session.send_audio(input_audio)

            with open(settings.output_audio_path, "wb") as output_audio:
                dispatcher = SessionUpdateDispatcher(
                    session, executor, output_audio, transcript_sink=transcript_sink
                )
                outcome = await dispatcher.run(session.receive_updates())

            logger.info(
                f"Wrote {dispatcher.audio_bytes_written} bytes of assistant audio "
                f"to {settings.output_audio_path}"
            )

    if outcome is DispatchOutcome.ERROR:
        details = dispatcher.last_error.details if dispatcher.last_error else None
        raise SessionError(details)
    return outcome


async def main(settings: Settings) -> int:
    """
    Run a conversation and translate its result into a process exit code.

    Returns:
        int: 0 when the assistant answered, 1 otherwise
    """
    try:
        outcome = await run_conversation(settings)
    except RealtimeRagError as e:
        logger.error(f"Conversation failed: {e}")
        return 1
    except AzureError as e:
        logger.error(f"Search service error: {e}")
        return 1
    except OSError as e:
        logger.error(f"Audio file error: {e}")
        return 1
    finally:
        # The transcript is written without a trailing newline
        print(file=sys.stdout)

    if outcome is DispatchOutcome.COMPLETED:
        return 0
    logger.error("Conversation ended before the assistant answered")
    return 1
