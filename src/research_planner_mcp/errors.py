"""Structured error handling — error categories, classification, and tool error model."""

from __future__ import annotations

from enum import Enum

import httpx
from pydantic import BaseModel


class ErrorCategory(str, Enum):
    """Categories of errors for diagnostics."""

    CREDENTIALS_MISSING = "CREDENTIALS_MISSING"
    API_PERMISSION_DENIED = "API_PERMISSION_DENIED"
    API_QUOTA_EXCEEDED = "API_QUOTA_EXCEEDED"
    API_INVALID_ARGUMENT = "API_INVALID_ARGUMENT"
    API_NOT_FOUND = "API_NOT_FOUND"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    URL_INVALID = "URL_INVALID"
    NETWORK_ERROR = "NETWORK_ERROR"
    TOOL_TIMEOUT = "TOOL_TIMEOUT"
    UNKNOWN = "UNKNOWN"


class ToolError(BaseModel):
    """Structured error returned from any tool."""

    error: str
    category: str
    hint: str
    retryable: bool = False
    retry_after_seconds: int | None = None


class MissingCredentialsError(RuntimeError):
    """Raised when a tool needs an API key that is not configured."""

    def __init__(self, env_var: str) -> None:
        super().__init__(f"Missing {env_var}. Please set it.")
        self.env_var = env_var


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an exception to an ErrorCategory + human-readable hint."""
    if isinstance(error, MissingCredentialsError):
        return (
            ErrorCategory.CREDENTIALS_MISSING,
            f"Set {error.env_var} in the environment or ~/.config/research-planner-mcp/.env",
        )
    if isinstance(error, (TimeoutError, httpx.TimeoutException)):
        return (
            ErrorCategory.NETWORK_ERROR,
            "Request timed out — try again or check connectivity",
        )
    if isinstance(error, httpx.TransportError):
        return (
            ErrorCategory.NETWORK_ERROR,
            "Network error talking to the upstream API — check connectivity",
        )

    s = str(error).lower()

    if "401" in s or "unauthorized" in s:
        return (
            ErrorCategory.API_PERMISSION_DENIED,
            "API key rejected — check the key for this tool",
        )
    if "403" in s:
        return (
            ErrorCategory.API_PERMISSION_DENIED,
            "Access denied — the API key lacks permission for this API",
        )
    if "429" in s or "quota" in s or "resource_exhausted" in s:
        return (
            ErrorCategory.API_QUOTA_EXCEEDED,
            "Rate limit hit — wait a minute and retry",
        )
    if "400" in s:
        return (
            ErrorCategory.API_INVALID_ARGUMENT,
            "Bad request — check input format",
        )
    if "invalid thinking level" in s or "invalid wikipedia language" in s or "unknown tool" in s:
        return (
            ErrorCategory.API_INVALID_ARGUMENT,
            "Invalid input parameter — check the allowed values",
        )
    if "404" in s or "not found" in s:
        return (
            ErrorCategory.API_NOT_FOUND,
            "Resource not found — deleted or invalid ID",
        )
    if "502" in s or "503" in s or "unavailable" in s:
        return (
            ErrorCategory.UPSTREAM_UNAVAILABLE,
            "Upstream service unavailable — try again shortly",
        )
    if "not a youtube url" in s or "invalid url" in s:
        return (
            ErrorCategory.URL_INVALID,
            "Provide a youtube.com or youtu.be video URL",
        )
    if "timeout" in s or "timed out" in s:
        return (
            ErrorCategory.NETWORK_ERROR,
            "Request timed out — try again or check connectivity",
        )

    return (ErrorCategory.UNKNOWN, str(error))


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception."""
    cat, hint = categorize_error(error)
    retryable = cat in {
        ErrorCategory.API_QUOTA_EXCEEDED,
        ErrorCategory.NETWORK_ERROR,
        ErrorCategory.UPSTREAM_UNAVAILABLE,
        ErrorCategory.TOOL_TIMEOUT,
    }
    return ToolError(
        error=str(error) or type(error).__name__,
        category=cat.value,
        hint=hint,
        retryable=retryable,
        retry_after_seconds=60 if cat == ErrorCategory.API_QUOTA_EXCEEDED else None,
    ).model_dump(mode="json")


def make_timeout_error(tool: str, seconds: float) -> dict:
    """ToolError dict for a tool slot abandoned after its timeout."""
    return ToolError(
        error=f"Tool '{tool}' did not finish within {seconds:g}s",
        category=ErrorCategory.TOOL_TIMEOUT.value,
        hint="Raise PLANNER_TOOL_TIMEOUT or retry later",
        retryable=True,
    ).model_dump(mode="json")
