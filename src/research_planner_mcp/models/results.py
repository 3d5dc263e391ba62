"""Pipeline models — the evidence unit, the synthesis result, and per-slot runs.

``ResultItem`` is the common shape every retrieval tool is normalised into
before ranking; ``SynthesisResult`` is the terminal value of one
orchestration call.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..types import ToolName


class ResultItem(BaseModel):
    """A single piece of retrieved evidence.

    ``source`` carries provenance (``web:<url>``, ``wiki:<title>``,
    ``youtube:<id>``, ``rag:<id>``). A missing score ranks as 0.
    """

    source: str = Field(min_length=1)
    text: str = ""
    score: float | None = Field(default=None, allow_inf_nan=False)

    @property
    def rank_score(self) -> float:
        return self.score if self.score is not None else 0.0


class SynthesisResult(BaseModel):
    """Output schema for synthesize_results and research_planner."""

    summary: str = ""
    sources: list[str] = Field(default_factory=list)


class ToolRun(BaseModel):
    """Outcome of one tool slot in a fan-out.

    Exactly one of the following holds: the tool produced ``items``
    (possibly none), or it failed and ``error`` holds a ToolError dict.
    """

    tool: ToolName
    items: list[ResultItem] = Field(default_factory=list)
    error: dict | None = None
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class PlannerReport(BaseModel):
    """Output schema for research_planner — synthesis plus routing diagnostics."""

    summary: str = ""
    sources: list[str] = Field(default_factory=list)
    tools: list[ToolName] = Field(default_factory=list)
    runs: list[ToolRun] = Field(default_factory=list)
