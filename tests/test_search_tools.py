"""Tests for the standalone web, Wikipedia, YouTube, and document tools."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import research_planner_mcp.tools.documents as documents_mod
import research_planner_mcp.tools.web as web_mod
import research_planner_mcp.tools.wikipedia as wikipedia_mod
import research_planner_mcp.tools.youtube as youtube_mod
from research_planner_mcp.models.tools import (
    VideoSummary,
    WebSearchResult,
    WikiSummary,
    YouTubeResearchResult,
)
from tests.conftest import unwrap_tool

web_search = unwrap_tool(web_mod.web_search)
wikipedia_search = unwrap_tool(wikipedia_mod.wikipedia_search)
youtube_research = unwrap_tool(youtube_mod.youtube_research)
index_document = unwrap_tool(documents_mod.index_document)
document_rag = unwrap_tool(documents_mod.document_rag)


class TestWebSearch:
    async def test_returns_tagged_result(self):
        search = AsyncMock(return_value=WebSearchResult(query="rust news"))
        with patch("research_planner_mcp.tools.web.search_web", search):
            out = await web_search("rust news", max_results=2)
        search.assert_awaited_once_with("rust news", 2)
        assert out["kind"] == "web"
        assert out["results"] == []

    async def test_missing_key_surfaces_in_error_field(self):
        out = await web_search("rust news")
        assert out["error"] == "Missing TAVILY_API_KEY"


class TestWikipediaSearch:
    async def test_returns_summary(self):
        wiki = WikiSummary(title="Rust", extract="A language.", url="https://en.wikipedia.org/wiki/Rust")
        with patch("research_planner_mcp.tools.wikipedia.fetch_summary", AsyncMock(return_value=wiki)):
            out = await wikipedia_search("Rust")
        assert out["kind"] == "wikipedia"
        assert out["extract"] == "A language."

    async def test_unexpected_failure_becomes_tool_error(self):
        with patch(
            "research_planner_mcp.tools.wikipedia.fetch_summary",
            AsyncMock(side_effect=RuntimeError("503 Service Unavailable")),
        ):
            out = await wikipedia_search("Rust")
        assert out["category"] == "UPSTREAM_UNAVAILABLE"
        assert out["retryable"] is True


class TestYouTubeResearch:
    async def test_requires_topic_or_url(self):
        out = await youtube_research()
        assert out["category"] == "API_INVALID_ARGUMENT"

    async def test_topic_search_renders_text(self):
        result = YouTubeResearchResult(videos=[VideoSummary(video_id="a", title="Hooks", url="u", summary="S")])
        research = AsyncMock(return_value=result)
        with patch("research_planner_mcp.tools.youtube.research_videos", research):
            out = await youtube_research(topic="react hooks", max_videos=1)
        research.assert_awaited_once_with("react hooks", 1)
        assert out["text"].startswith("#1 Hooks")

    async def test_url_takes_precedence(self):
        research = AsyncMock(return_value=YouTubeResearchResult())
        with patch("research_planner_mcp.tools.youtube.research_video_url", research):
            out = await youtube_research(topic="ignored", url="https://youtu.be/abc")
        research.assert_awaited_once_with("https://youtu.be/abc")
        assert out["text"] == "No videos found for the given topic."

    async def test_error_text_when_nothing_found(self):
        out = await youtube_research(topic="react hooks")
        assert out["error"] == "Missing YOUTUBE_API_KEY. Please set it."
        assert out["text"] == out["error"]


class TestDocumentTools:
    async def test_index_then_query(self):
        first = await index_document("doc-1", "solar panels convert sunlight into electricity")
        again = await index_document("doc-1", "solar panels convert sunlight into electricity")
        await index_document("doc-2", "the history of bread baking")

        assert first == {"id": "doc-1", "indexed": True, "total": 1}
        assert again["indexed"] is False

        out = await document_rag("solar panels convert sunlight into electricity", top_k=1)
        assert out["kind"] == "rag"
        assert [h["id"] for h in out["hits"]] == ["doc-1"]


async def test_wikipedia_tool_falls_back_on_malformed_body():
    with patch("research_planner_mcp.wikipedia.get_json", AsyncMock(return_value=["unexpected"])):
        out = await wikipedia_search("Rust")
    assert out["kind"] == "wikipedia"
    assert out["extract"].startswith("Failed to fetch Wikipedia summary")
