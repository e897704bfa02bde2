"""
Exception hierarchy for the realtime RAG voice client.

Every error raised by the package derives from RealtimeRagError so callers
can catch the whole family at the process boundary.
"""

from typing import Any, Dict, Optional


class RealtimeRagError(Exception):
    """Base class for all errors raised by the package."""


class ConfigurationMissing(RealtimeRagError):
    """A required setting was not provided."""

    def __init__(self, setting: str, env_var: Optional[str] = None):
        self.setting = setting
        self.env_var = env_var
        source = f" (set {env_var})" if env_var else ""
        super().__init__(f"'{setting}' must be set{source}")


class MalformedToolArguments(RealtimeRagError):
    """The streamed arguments of a tool call could not be interpreted."""

    def __init__(self, function_name: str, arguments: str, reason: str):
        self.function_name = function_name
        self.arguments = arguments
        self.reason = reason
        super().__init__(f"Malformed arguments for tool '{function_name}': {reason}")


class UnsupportedTool(RealtimeRagError):
    """The model asked for a tool this client does not provide."""

    def __init__(self, function_name: Optional[str]):
        self.function_name = function_name
        super().__init__(f"Unsupported tool '{function_name}'")


class SessionError(RealtimeRagError):
    """The realtime session reported an error update."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        self.details = details or {}
        message = self.details.get("message") or "realtime session reported an error"
        super().__init__(message)


class SessionConnectionError(RealtimeRagError):
    """The realtime session websocket could not be used."""


class SearchServiceError(RealtimeRagError):
    """The product search backend failed."""

    def __init__(self, query: str, reason: str):
        self.query = query
        self.reason = reason
        super().__init__(f"Search for '{query}' failed: {reason}")
