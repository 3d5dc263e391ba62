"""Tool adapters — one per retrieval tool, all with the same async contract.

An adapter takes the research query plus tool-specific options, calls its
collaborator, validates the tagged output once, and normalises it into
``ResultItem``s. Collaborator-level failures (missing keys, HTTP errors)
arrive as data and end up as an empty list or a diagnostic item.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter

from . import tavily, wikipedia, youtube
from .config import get_config
from .documents import DocumentIndex, document_index
from .models.results import ResultItem
from .models.tools import RagResult, ToolOutput, WebSearchResult, WikiSummary, YouTubeResearchResult
from .render import render_video
from .types import ToolName

logger = logging.getLogger(__name__)

WIKIPEDIA_BASELINE_SCORE = 0.7
YOUTUBE_BASELINE_SCORE = 0.6

_TOOL_OUTPUT = TypeAdapter(ToolOutput)


@runtime_checkable
class ToolAdapter(Protocol):
    """Interface every retrieval tool adapter implements."""

    name: ToolName

    async def invoke(self, query: str, options: dict[str, Any] | None = None) -> list[ResultItem]:
        """Return zero or more result items for *query*."""
        ...


def to_result_items(output: Any) -> list[ResultItem]:
    """Validate a tool output against the tagged union and normalise it."""
    parsed = _TOOL_OUTPUT.validate_python(output)

    if isinstance(parsed, WebSearchResult):
        return [
            ResultItem(
                source=f"web:{r.url or r.title or i}",
                text=r.content or r.title,
                score=r.score,
            )
            for i, r in enumerate(parsed.results, start=1)
        ]
    if isinstance(parsed, WikiSummary):
        return [ResultItem(source=f"wiki:{parsed.title}", text=parsed.extract, score=WIKIPEDIA_BASELINE_SCORE)]
    if isinstance(parsed, YouTubeResearchResult):
        return [
            ResultItem(source=f"youtube:{v.video_id}", text=render_video(v), score=YOUTUBE_BASELINE_SCORE)
            for v in parsed.videos
        ]
    if isinstance(parsed, RagResult):
        return [ResultItem(source=f"rag:{h.id}", text=h.text, score=h.score) for h in parsed.hits]
    raise TypeError(f"Unhandled tool output: {type(parsed).__name__}")


def _log_diagnostic(tool: str, error: str | None) -> None:
    if error:
        logger.warning("%s tool reported: %s", tool, error)


class WebSearchAdapter:
    """General web search via Tavily. Options: ``max_results``."""

    name: ToolName = "web"

    async def invoke(self, query: str, options: dict[str, Any] | None = None) -> list[ResultItem]:
        opts = options or {}
        result = await tavily.search_web(query, opts.get("max_results", get_config().web_max_results))
        _log_diagnostic(self.name, result.error)
        return to_result_items(result)


class WikipediaAdapter:
    """Encyclopedic summary. Options: ``title`` (defaults to one derived from the query)."""

    name: ToolName = "wikipedia"

    async def invoke(self, query: str, options: dict[str, Any] | None = None) -> list[ResultItem]:
        opts = options or {}
        result = await wikipedia.fetch_summary(opts.get("title") or wikipedia.title_from_query(query))
        _log_diagnostic(self.name, result.error)
        return to_result_items(result)


class YouTubeAdapter:
    """Video research. Options: ``url`` for a single video, else ``max_videos``."""

    name: ToolName = "youtube"

    async def invoke(self, query: str, options: dict[str, Any] | None = None) -> list[ResultItem]:
        opts = options or {}
        if opts.get("url"):
            result = await youtube.research_video_url(opts["url"])
        else:
            result = await youtube.research_videos(
                query, opts.get("max_videos", get_config().youtube_max_videos),
            )
        _log_diagnostic(self.name, result.error)
        return to_result_items(result)


class DocumentRagAdapter:
    """Similarity lookup against the in-memory document index. Options: ``top_k``."""

    name: ToolName = "rag"

    def __init__(self, index: DocumentIndex | None = None) -> None:
        self._index = index if index is not None else document_index

    async def invoke(self, query: str, options: dict[str, Any] | None = None) -> list[ResultItem]:
        opts = options or {}
        result = self._index.search(query, opts.get("top_k", get_config().rag_top_k))
        _log_diagnostic(self.name, result.error)
        return to_result_items(result)


def default_adapters() -> dict[ToolName, ToolAdapter]:
    """One adapter per known tool, backed by the live collaborators."""
    return {
        "web": WebSearchAdapter(),
        "wikipedia": WikipediaAdapter(),
        "youtube": YouTubeAdapter(),
        "rag": DocumentRagAdapter(),
    }
