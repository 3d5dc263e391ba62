"""Infrastructure tools — runtime status and configuration."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..config import get_config, update_config
from ..documents import document_index
from ..errors import make_tool_error
from ..tracing import trace
from ..types import TOOL_NAMES

infra_server = FastMCP("infra")
_SENSITIVE_CONFIG_FIELDS = {
    "gemini_api_key",
    "tavily_api_key",
    "youtube_api_key",
}


def _redacted_config() -> dict:
    """Return runtime config with secret-bearing fields removed."""
    return get_config().model_dump(exclude=_SENSITIVE_CONFIG_FIELDS)


def _credentials() -> dict[str, bool]:
    cfg = get_config()
    return {
        "tavily": bool(cfg.tavily_api_key),
        "youtube": bool(cfg.youtube_api_key),
        "gemini": bool(cfg.gemini_api_key),
    }


@infra_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="infra_status", span_type="TOOL")
async def infra_status() -> dict:
    """Report configuration, which credentials are present, and index size.

    Returns:
        Dict with current_config (secrets removed), credentials, tools,
        and indexed_documents.
    """
    return {
        "current_config": _redacted_config(),
        "credentials": _credentials(),
        "tools": list(TOOL_NAMES),
        "indexed_documents": document_index.count,
    }


@infra_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
@trace(name="infra_configure", span_type="TOOL")
async def infra_configure(
    max_words: Annotated[int | None, Field(ge=1, description="Default summary word budget")] = None,
    tool_timeout: Annotated[float | None, Field(gt=0, description="Per-tool timeout in seconds")] = None,
    model: Annotated[str | None, Field(description="Gemini model ID for video summaries")] = None,
    thinking_level: Annotated[str | None, Field(description="minimal, low, medium, or high")] = None,
) -> dict:
    """Reconfigure the planner at runtime.

    Changes take effect immediately for all subsequent tool calls.

    Args:
        max_words: Default word budget for research_planner.
        tool_timeout: Seconds before a slow tool is given up on.
        model: Gemini model used to summarise videos.
        thinking_level: Gemini thinking depth.

    Returns:
        Dict with current_config.
    """
    try:
        cfg = update_config(
            default_max_words=max_words,
            tool_timeout_seconds=tool_timeout,
            default_model=model,
            default_thinking_level=thinking_level,
        )
        return {"current_config": cfg.model_dump(exclude=_SENSITIVE_CONFIG_FIELDS)}
    except Exception as exc:
        return make_tool_error(exc)
