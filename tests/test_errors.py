"""
Unit tests for the exception hierarchy.
"""

import pytest

from realtime_rag.errors import (
    ConfigurationMissing,
    MalformedToolArguments,
    RealtimeRagError,
    SearchServiceError,
    SessionConnectionError,
    SessionError,
    UnsupportedTool,
)


@pytest.mark.parametrize("error", [
    ConfigurationMissing("deployment", "AZURE_OPENAI_DEPLOYMENT"),
    MalformedToolArguments("search", "{", "invalid JSON"),
    UnsupportedTool("get_weather"),
    SessionError({"message": "boom"}),
    SessionConnectionError("closed"),
    SearchServiceError("tents", "index not found"),
])
def test_errors_share_base_class(error):
    assert isinstance(error, RealtimeRagError)


def test_configuration_missing_message():
    error = ConfigurationMissing("search_index", "AZURE_SEARCH_INDEX")
    assert str(error) == "'search_index' must be set (set AZURE_SEARCH_INDEX)"
    assert str(ConfigurationMissing("search_index")) == "'search_index' must be set"


def test_session_error_details():
    error = SessionError({"code": "server_error", "message": "Internal failure"})
    assert str(error) == "Internal failure"
    assert error.details["code"] == "server_error"
    assert str(SessionError()) == "realtime session reported an error"


def test_search_service_error_message():
    error = SearchServiceError("tents", "index not found")
    assert str(error) == "Search for 'tents' failed: index not found"
    assert error.query == "tents"
