"""
Models module for data structures and state management in the realtime RAG client.

Key components:
- updates: Pydantic models for the updates a realtime session produces
  (function call argument deltas, audio deltas, transcript deltas, finished
  items, finished responses and errors) and parse_server_event(), which maps
  raw server events onto them.
- session: Pydantic models for outgoing messages: session options, function
  tool declarations and function call output items.
- pending_calls: PendingFunctionCalls, the per-call-id argument buffers the
  dispatcher fills while a function call streams in.

Usage examples:
```python
from realtime_rag.models import PendingFunctionCalls, parse_server_event

pending = PendingFunctionCalls()
update = parse_server_event({
    "type": "response.function_call_arguments.delta",
    "call_id": "call_1",
    "delta": '{"query": ',
})
pending.append(update.call_id, update.delta)
```
"""

from realtime_rag.models.pending_calls import PendingFunctionCalls
from realtime_rag.models.session import (
    DEFAULT_INSTRUCTIONS,
    FunctionCallOutputItem,
    FunctionTool,
    SessionOptions,
    TurnDetection,
)
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
