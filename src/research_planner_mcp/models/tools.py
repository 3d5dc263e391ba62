"""Per-tool output models — one variant per retrieval tool.

Every tool returns one of these, tagged by ``kind``. ``ToolOutput`` is the
discriminated union validated at the adapter boundary, so nothing
downstream of an adapter reads raw API payloads.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class WebSearchItem(BaseModel):
    """A single Tavily search hit."""

    title: str = ""
    url: str = ""
    content: str = ""
    score: float | None = Field(default=None, allow_inf_nan=False)


class WebSearchResult(BaseModel):
    """Output schema for web_search."""

    kind: Literal["web"] = "web"
    query: str
    results: list[WebSearchItem] = Field(default_factory=list)
    error: str | None = None


class WikiSummary(BaseModel):
    """Output schema for wikipedia_search.

    On a failed lookup ``extract`` holds an explanatory message and
    ``error`` is set; the extract is still shown to the caller.
    """

    kind: Literal["wikipedia"] = "wikipedia"
    title: str
    extract: str = ""
    url: str | None = None
    error: str | None = None


class VideoSummary(BaseModel):
    """One discovered YouTube video and its generated summary."""

    video_id: str
    title: str = ""
    channel_title: str = ""
    published_at: str = ""
    url: str = ""
    summary: str = ""


class YouTubeResearchResult(BaseModel):
    """Output schema for youtube_research."""

    kind: Literal["youtube"] = "youtube"
    videos: list[VideoSummary] = Field(default_factory=list)
    error: str | None = None


class RagHit(BaseModel):
    """A document match from the in-memory index."""

    id: str
    text: str
    score: float


class RagResult(BaseModel):
    """Output schema for document_rag."""

    kind: Literal["rag"] = "rag"
    query: str
    hits: list[RagHit] = Field(default_factory=list)
    error: str | None = None


ToolOutput = Annotated[
    Union[WebSearchResult, WikiSummary, YouTubeResearchResult, RagResult],
    Field(discriminator="kind"),
]
