"""
Tracking of function calls whose arguments are still streaming in.

The PendingFunctionCalls class keeps one text buffer per call id. Argument
fragments are appended in arrival order with no separator; once a call is
dispatched its buffer is reset to empty but the entry is kept, since a call
id may be reused within a turn.
"""

from typing import Dict


class PendingFunctionCalls:
    """
    Accumulates the streamed JSON arguments of function calls by call id.
    """

    def __init__(self):
        """Initialize an empty registry of argument buffers."""
        self._buffers: Dict[str, str] = {}

    def append(self, call_id: str, fragment: str) -> None:
        """
        Append an argument fragment to the buffer of a call, creating it if needed.

        Args:
            call_id: Identifier of the function call
            fragment: Next piece of the JSON argument text
        """
        self._buffers[call_id] = self._buffers.get(call_id, "") + fragment

    def get(self, call_id: str) -> str:
        """Return the accumulated arguments for a call, or an empty string."""
        return self._buffers.get(call_id, "")

    def has_arguments(self, call_id: str) -> bool:
        """Whether the call has a non-empty argument buffer."""
        return bool(self._buffers.get(call_id))

    def reset(self, call_id: str) -> None:
        """Clear the buffer of a dispatched call, keeping its entry."""
        self._buffers[call_id] = ""

    def __contains__(self, call_id: object) -> bool:
        return call_id in self._buffers

    def __len__(self) -> int:
        return len(self._buffers)
