"""Wikipedia summary tool."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..errors import make_tool_error
from ..tracing import trace
from ..wikipedia import fetch_summary

wikipedia_server = FastMCP("wikipedia")


@wikipedia_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    )
)
@trace(name="wikipedia_search", span_type="TOOL")
async def wikipedia_search(
    title: Annotated[str, Field(min_length=2, description="Wikipedia page title")],
) -> dict:
    """Extract the lead summary of a Wikipedia page.

    Args:
        title: Page title, e.g. "Photosynthesis".

    Returns:
        Dict with title, extract, and page url.
    """
    try:
        result = await fetch_summary(title)
        return result.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)
