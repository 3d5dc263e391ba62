"""Research orchestrator: routes a query to tools and merges what comes back.

Every selected tool runs concurrently on the event loop. Each slot is
wrapped so an exception or a timeout becomes a ``ToolRun.error`` for that
tool alone; the join waits for every slot to settle before synthesis.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .adapters import ToolAdapter, default_adapters
from .config import get_config
from .errors import make_timeout_error, make_tool_error
from .intent import classify, normalize_selection
from .models.results import PlannerReport, ResultItem, SynthesisResult, ToolRun
from .synthesis import synthesize
from .tracing import slot_span
from .types import ToolName

logger = logging.getLogger(__name__)

NO_RESULTS_SUMMARY = "No relevant information found."


def no_results() -> SynthesisResult:
    return SynthesisResult(summary=NO_RESULTS_SUMMARY, sources=[])


def flatten_runs(runs: Sequence[ToolRun]) -> list[ResultItem]:
    """Pool the items of every successful run, dropping blank-text items."""
    return [item for run in runs if run.ok for item in run.items if item.text.strip()]


class Orchestrator:
    """Routes a query to retrieval tools and merges what they return.

    Args:
        adapters: Tool name → adapter. Defaults to the live collaborators.
        classifier: Query → tool list, used when the caller names no tools.
        timeout: Per-tool timeout in seconds. Defaults to ``PLANNER_TOOL_TIMEOUT``.
    """

    def __init__(
        self,
        adapters: Mapping[ToolName, ToolAdapter] | None = None,
        classifier: Callable[[str], list[ToolName]] = classify,
        timeout: float | None = None,
    ) -> None:
        self._adapters = dict(adapters) if adapters is not None else default_adapters()
        self._classifier = classifier
        self._timeout = timeout

    def select(self, query: str, sources: Sequence[str] | None = None) -> list[ToolName]:
        """Explicit *sources* win over the classifier; an empty list counts as none."""
        if sources:
            return normalize_selection(sources)
        return self._classifier(query)

    async def _run_slot(self, tool: ToolName, query: str, options: dict[str, Any] | None) -> ToolRun:
        with slot_span(tool, query) as span:
            run = await self._invoke(tool, query, options)
            span.record(
                tool=tool,
                item_count=len(run.items),
                elapsed_ms=run.elapsed_ms,
                error_category=run.error.get("category", "") if run.error else "",
            )
        return run

    async def _invoke(self, tool: ToolName, query: str, options: dict[str, Any] | None) -> ToolRun:
        started = time.monotonic()

        def _elapsed() -> int:
            return int((time.monotonic() - started) * 1000)

        adapter = self._adapters.get(tool)
        if adapter is None:
            return ToolRun(tool=tool, error=make_tool_error(LookupError(f"No adapter registered for '{tool}'")))

        timeout = self._timeout if self._timeout is not None else get_config().tool_timeout_seconds
        try:
            items = await asyncio.wait_for(adapter.invoke(query, options), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Tool %s timed out after %.1fs", tool, timeout)
            return ToolRun(tool=tool, error=make_timeout_error(tool, timeout), elapsed_ms=_elapsed())
        except Exception as exc:
            logger.warning("Tool %s failed: %s", tool, exc)
            return ToolRun(tool=tool, error=make_tool_error(exc), elapsed_ms=_elapsed())

        logger.info("Tool %s returned %d item(s) in %dms", tool, len(items), _elapsed())
        return ToolRun(tool=tool, items=list(items), elapsed_ms=_elapsed())

    async def fan_out(
        self,
        query: str,
        tools: Sequence[ToolName],
        options: Mapping[ToolName, dict[str, Any]] | None = None,
    ) -> list[ToolRun]:
        """Invoke every tool concurrently and wait for all of them to settle."""
        options = options or {}
        runs = await asyncio.gather(*[self._run_slot(t, query, options.get(t)) for t in tools])
        return list(runs)

    async def run_detailed(
        self,
        query: str,
        sources: Sequence[str] | None = None,
        *,
        max_words: int | None = None,
        options: Mapping[ToolName, dict[str, Any]] | None = None,
    ) -> PlannerReport:
        """Full pipeline, keeping the tool selection and per-tool runs."""
        tools = self.select(query, sources)
        logger.info("Planner selected %s for %r", ",".join(tools), query)
        runs = await self.fan_out(query, tools, options)

        pool = flatten_runs(runs)
        if pool:
            words = max_words if max_words is not None else get_config().default_max_words
            result = synthesize(pool, words)
        else:
            result = no_results()
        return PlannerReport(summary=result.summary, sources=result.sources, tools=tools, runs=runs)

    async def run(
        self,
        query: str,
        sources: Sequence[str] | None = None,
        *,
        max_words: int | None = None,
    ) -> SynthesisResult:
        """Route *query*, run the chosen tools, and return the merged answer."""
        report = await self.run_detailed(query, sources, max_words=max_words)
        return SynthesisResult(summary=report.summary, sources=report.sources)
