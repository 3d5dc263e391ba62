"""Tests for the Tavily web search client."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from research_planner_mcp.tavily import TAVILY_SEARCH_URL, _parse_results, search_web


class TestParseResults:
    def test_maps_rows(self):
        rows = _parse_results({"results": [
            {"title": "T", "url": "https://t.test", "content": "body", "score": 0.8},
            {"title": None, "url": "https://u.test", "content": "x", "score": "high"},
        ]})
        assert rows[0].score == 0.8
        assert rows[1].title == ""
        assert rows[1].score is None

    def test_tolerates_missing_results(self):
        assert _parse_results({}) == []
        assert _parse_results(None) == []


class TestSearchWeb:
    async def test_missing_key_returns_error(self):
        post = AsyncMock()
        with patch("research_planner_mcp.tavily.post_json", post):
            result = await search_web("latest rust news")
        assert result.error == "Missing TAVILY_API_KEY"
        assert result.results == []
        post.assert_not_awaited()

    async def test_sends_key_and_trims(self, monkeypatch):
        monkeypatch.setenv("TAVILY_API_KEY", "tvly-test")
        data = {"results": [{"title": f"r{i}", "url": f"https://r{i}.test", "content": "c"} for i in range(5)]}
        post = AsyncMock(return_value=data)
        with patch("research_planner_mcp.tavily.post_json", post):
            result = await search_web("latest rust news", max_results=2)

        post.assert_awaited_once_with(
            TAVILY_SEARCH_URL,
            {"api_key": "tvly-test", "query": "latest rust news", "max_results": 2},
        )
        assert [r.title for r in result.results] == ["r0", "r1"]
        assert result.error is None

    async def test_request_failure_becomes_error(self, monkeypatch):
        monkeypatch.setenv("TAVILY_API_KEY", "tvly-test")
        post = AsyncMock(side_effect=RuntimeError("401 Unauthorized"))
        with patch("research_planner_mcp.tavily.post_json", post):
            result = await search_web("q")
        assert result.error == "401 Unauthorized"
        assert result.results == []


class TestMalformedResponses:
    @pytest.mark.parametrize("body", [["unexpected"], "text", {"results": "nope"}])
    async def test_bad_body_becomes_error(self, monkeypatch, body):
        monkeypatch.setenv("TAVILY_API_KEY", "tvly-test")
        with patch("research_planner_mcp.tavily.post_json", AsyncMock(return_value=body)):
            result = await search_web("q")
        assert result.results == []
        assert result.error.startswith("Unexpected Tavily response")

    async def test_non_object_rows_are_skipped(self, monkeypatch):
        monkeypatch.setenv("TAVILY_API_KEY", "tvly-test")
        body = {"results": ["oops", None, {"title": "ok", "url": "https://ok.test", "content": "c"}]}
        with patch("research_planner_mcp.tavily.post_json", AsyncMock(return_value=body)):
            result = await search_web("q")
        assert result.error is None
        assert [r.url for r in result.results] == ["https://ok.test"]

    @pytest.mark.parametrize("raw", [True, False, float("nan"), float("inf"), "0.9", None])
    def test_unusable_scores_dropped(self, raw):
        rows = _parse_results({"results": [{"title": "t", "url": "u", "content": "c", "score": raw}]})
        assert rows[0].score is None

    def test_integer_score_kept(self):
        rows = _parse_results({"results": [{"title": "t", "url": "u", "content": "c", "score": 1}]})
        assert rows[0].score == 1.0

    async def test_nan_score_does_not_sink_the_web_slot(self, monkeypatch):
        from research_planner_mcp.adapters import WebSearchAdapter

        monkeypatch.setenv("TAVILY_API_KEY", "tvly-test")
        body = {"results": [
            {"title": "a", "url": "https://a.test", "content": "alpha", "score": float("nan")},
            {"title": "b", "url": "https://b.test", "content": "beta", "score": 0.4},
        ]}
        with patch("research_planner_mcp.tavily.post_json", AsyncMock(return_value=body)):
            items = await WebSearchAdapter().invoke("q")
        assert [(i.source, i.score) for i in items] == [("web:https://a.test", None), ("web:https://b.test", 0.4)]
