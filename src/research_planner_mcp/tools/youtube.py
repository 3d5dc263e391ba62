"""YouTube research tool — search by topic or summarise one video."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..errors import make_tool_error
from ..render import render_videos
from ..tracing import trace
from ..types import YouTubeUrl
from ..youtube import research_video_url, research_videos

youtube_server = FastMCP("youtube")


@youtube_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="youtube_research", span_type="TOOL")
async def youtube_research(
    topic: Annotated[str, Field(min_length=3, description="Search topic")] | None = None,
    url: YouTubeUrl | None = None,
    max_videos: Annotated[int, Field(ge=1, le=5, description="Videos to analyze for a topic search")] = 3,
) -> dict:
    """Search and summarise YouTube videos by topic, or summarise one video by URL.

    Costs 100 YouTube API units per topic search plus one Gemini call per
    video. A ``url`` takes precedence over ``topic``.

    Args:
        topic: What to search for.
        url: A single video to summarise instead of searching.
        max_videos: Videos to summarise for a topic search (1-5).

    Returns:
        Dict with videos, a rendered text listing, and an error string
        when nothing could be produced.
    """
    if not topic and not url:
        return make_tool_error(ValueError("400: provide either topic or url"))
    try:
        if url:
            result = await research_video_url(url)
        else:
            result = await research_videos(topic, max_videos)
        out = result.model_dump(mode="json")
        out["text"] = result.error if result.error and not result.videos else render_videos(result.videos)
        return out
    except Exception as exc:
        return make_tool_error(exc)
