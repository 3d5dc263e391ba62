"""Shared type aliases for tool parameters."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

# ── Literal enums ────────────────────────────────────────────────────────────

ToolName = Literal["web", "wikipedia", "youtube", "rag"]
TOOL_NAMES: tuple[ToolName, ...] = ("web", "wikipedia", "youtube", "rag")

# ── Annotated aliases ────────────────────────────────────────────────────────

QueryParam = Annotated[str, Field(min_length=3, max_length=2000, description="Research query or question")]
MaxWords = Annotated[int, Field(ge=50, le=1000, description="Word budget for the merged summary")]
YouTubeUrl = Annotated[str, Field(min_length=10, description="YouTube video URL (youtube.com or youtu.be)")]
