"""Planner tools — orchestrated research and standalone synthesis."""

from __future__ import annotations

import logging
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..models.results import ResultItem
from ..orchestrator import Orchestrator
from ..synthesis import synthesize
from ..tracing import trace
from ..types import MaxWords, QueryParam, ToolName

logger = logging.getLogger(__name__)
planner_server = FastMCP("planner")


@planner_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="research_planner", span_type="TOOL")
async def research_planner(
    query: QueryParam,
    sources: Annotated[list[ToolName] | None, Field(
        description="Tools to run (web, wikipedia, youtube, rag). Omit to pick them from the query.",
    )] = None,
    max_words: Annotated[MaxWords | None, Field(description="Summary word budget (default 300)")] = None,
) -> dict:
    """Research a query across several tools and merge the results.

    Picks tools from the query wording unless ``sources`` is given, runs
    them concurrently, and merges every result into one ranked summary.
    A failing tool only loses its own results.

    Args:
        query: Research question.
        sources: Explicit tool selection, overriding the keyword heuristics.
        max_words: Word budget for the merged summary.

    Returns:
        Dict with summary, sources, tools, and per-tool runs.
    """
    report = await Orchestrator().run_detailed(query, sources, max_words=max_words)
    return report.model_dump(mode="json")


@planner_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="synthesize_results", span_type="TOOL")
async def synthesize_results(
    items: Annotated[list[ResultItem], Field(description="Result items: source, text, optional score")],
    max_words: MaxWords = 300,
) -> dict:
    """Combine result items into one ranked, word-bounded answer.

    Args:
        items: Evidence to merge; higher scores come first.
        max_words: Word budget for the merged summary.

    Returns:
        Dict with summary and the ranked source list.
    """
    return synthesize(items, max_words).model_dump(mode="json")
