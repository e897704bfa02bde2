"""
Bot module for running a realtime voice conversation grounded in product search.

Key components:
- RealtimeConversationSession: WebSocket client for an Azure OpenAI realtime
  deployment; configures the session, streams input audio, adds conversation
  items, starts response turns and exposes server events as updates.
- SessionUpdateDispatcher: Drains the update stream, writing audio and
  transcript output, accumulating function call arguments and running tools.
- ToolExecutor: Executes the "search" tool against the product catalog.

Usage examples:
```python
from realtime_rag.bot import RealtimeConversationSession, SessionUpdateDispatcher, ToolExecutor
from realtime_rag.models import SessionOptions

async def converse(search_client, audio_file, output_file):
    executor = ToolExecutor(search_client)
    async with RealtimeConversationSession(endpoint, api_key, "gpt-4o-realtime-preview") as session:
        await session.configure(SessionOptions(tools=executor.tools))
        await session.send_audio(audio_file)
        dispatcher = SessionUpdateDispatcher(session, executor, output_file)
        return await dispatcher.run(session.receive_updates())
```
"""

from realtime_rag.bot.dispatcher import DispatchOutcome, SessionUpdateDispatcher
from realtime_rag.bot.realtime_api import RealtimeConversationSession
from realtime_rag.bot.tools import SEARCH_TOOL, ToolExecutor

__all__ = [
    "DispatchOutcome",
    "RealtimeConversationSession",
    "SEARCH_TOOL",
    "SessionUpdateDispatcher",
    "ToolExecutor",
]
