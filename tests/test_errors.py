"""Tests for structured error categorization and retryability flags."""

from __future__ import annotations

import httpx
import pytest

from research_planner_mcp.errors import (
    ErrorCategory,
    MissingCredentialsError,
    categorize_error,
    make_timeout_error,
    make_tool_error,
)


class TestMakeToolError:
    def test_builtin_timeout_maps_to_network_error(self):
        result = make_tool_error(TimeoutError())
        assert result["category"] == "NETWORK_ERROR"
        assert result["retryable"] is True
        assert result["error"] == "TimeoutError"

    def test_httpx_timeout_maps_to_network_error(self):
        result = make_tool_error(httpx.ReadTimeout("read timed out"))
        assert result["category"] == "NETWORK_ERROR"
        assert result["retryable"] is True

    def test_httpx_network_maps_to_network_error(self):
        result = make_tool_error(httpx.ConnectError("connection refused"))
        assert result["category"] == "NETWORK_ERROR"

    def test_missing_credentials(self):
        result = make_tool_error(MissingCredentialsError("TAVILY_API_KEY"))
        assert result["category"] == "CREDENTIALS_MISSING"
        assert result["error"] == "Missing TAVILY_API_KEY. Please set it."
        assert "TAVILY_API_KEY" in result["hint"]
        assert result["retryable"] is False

    def test_quota_sets_retry_after(self):
        result = make_tool_error(RuntimeError("429 RESOURCE_EXHAUSTED"))
        assert result["category"] == "API_QUOTA_EXCEEDED"
        assert result["retryable"] is True
        assert result["retry_after_seconds"] == 60


class TestCategorizeError:
    @pytest.mark.parametrize("message,category", [
        ("401 Unauthorized", ErrorCategory.API_PERMISSION_DENIED),
        ("403 Forbidden", ErrorCategory.API_PERMISSION_DENIED),
        ("Quota exceeded", ErrorCategory.API_QUOTA_EXCEEDED),
        ("400 Bad Request", ErrorCategory.API_INVALID_ARGUMENT),
        ("Unknown tool 'bing'. Available: web", ErrorCategory.API_INVALID_ARGUMENT),
        ("Page not found", ErrorCategory.API_NOT_FOUND),
        ("503 Service Unavailable", ErrorCategory.UPSTREAM_UNAVAILABLE),
        ("Not a YouTube URL: https://vimeo.com/1", ErrorCategory.URL_INVALID),
        ("upstream timed out", ErrorCategory.NETWORK_ERROR),
        ("something odd", ErrorCategory.UNKNOWN),
    ])
    def test_message_patterns(self, message, category):
        assert categorize_error(RuntimeError(message))[0] == category


def test_timeout_error_shape():
    result = make_timeout_error("youtube", 2.5)
    assert result == {
        "error": "Tool 'youtube' did not finish within 2.5s",
        "category": "TOOL_TIMEOUT",
        "hint": "Raise PLANNER_TOOL_TIMEOUT or retry later",
        "retryable": True,
        "retry_after_seconds": None,
    }
