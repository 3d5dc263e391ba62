"""Shared test fixtures for research-planner-mcp."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


@pytest.fixture(autouse=True)
def _set_dummy_api_key(monkeypatch):
    """Ensure tests never hit real upstream APIs with real credentials."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key-not-real")
    monkeypatch.delenv("TAVILY_API_KEY", raising=False)
    monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)


@pytest.fixture(autouse=True)
def _disable_tracing(monkeypatch):
    """Disable MLflow tracing in all tests to avoid real tracking-server calls."""
    monkeypatch.setenv("PLANNER_TRACING_ENABLED", "false")


@pytest.fixture(autouse=True)
def _isolate_dotenv(tmp_path, monkeypatch):
    """Prevent tests from loading the user's real ~/.config/research-planner-mcp/.env."""
    monkeypatch.setattr(
        "research_planner_mcp.dotenv.DEFAULT_ENV_PATH",
        tmp_path / "nonexistent.env",
    )


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the config singleton between tests."""
    import research_planner_mcp.config as cfg_mod

    cfg_mod._config = None
    yield
    cfg_mod._config = None


@pytest.fixture(autouse=True)
def _fresh_singletons():
    """Empty the document index and drop the cached YouTube service."""
    from research_planner_mcp.documents import document_index
    from research_planner_mcp.youtube import YouTubeClient

    document_index.clear()
    YouTubeClient.reset()
    yield
    document_index.clear()
    YouTubeClient.reset()


@pytest.fixture()
def mock_gemini_client():
    """Patch GeminiClient.get() and .generate() for unit tests."""
    with (
        patch("research_planner_mcp.client.GeminiClient.get") as mock_get,
        patch(
            "research_planner_mcp.client.GeminiClient.generate", new_callable=AsyncMock
        ) as mock_gen,
    ):
        client = MagicMock()
        mock_get.return_value = client
        yield {"get": mock_get, "generate": mock_gen, "client": client}


class FakeAdapter:
    """Scriptable ToolAdapter for orchestrator tests."""

    def __init__(self, name: str, items=None, exc: Exception | None = None, delay: float = 0.0):
        self.name = name
        self._items = items or []
        self._exc = exc
        self._delay = delay
        self.calls: list[tuple[str, dict | None]] = []

    async def invoke(self, query: str, options: dict | None = None):
        import asyncio

        self.calls.append((query, options))
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._exc is not None:
            raise self._exc
        return list(self._items)
