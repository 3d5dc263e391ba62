"""Web search tool — Tavily search API."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..errors import make_tool_error
from ..tavily import search_web
from ..tracing import trace
from ..types import QueryParam

web_server = FastMCP("web")


@web_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="web_search", span_type="TOOL")
async def web_search(
    query: QueryParam,
    max_results: Annotated[int, Field(ge=1, le=10, description="Number of results")] = 5,
) -> dict:
    """Search the web using Tavily.

    Args:
        query: Search terms.
        max_results: How many results to return (1-10).

    Returns:
        Dict with query, ranked results (title, url, content, score), and
        an error string when the search could not run.
    """
    try:
        result = await search_web(query, max_results)
        return result.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)
