"""Keyword intent classifier — picks which retrieval tools a query needs.

Each rule is an independent ``(pattern, tool)`` pair evaluated against the
lower-cased query. Every rule that matches adds its tool, in rule order.
When nothing matches the query goes to general web search.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from .types import TOOL_NAMES, ToolName

DEFAULT_TOOLS: tuple[ToolName, ...] = ("web",)

INTENT_RULES: tuple[tuple[re.Pattern[str], ToolName], ...] = (
    (
        re.compile(r"\bwhat\s+is\b|\boverview\b|\bsummary\b|\bdefine\b|\bdefinition\b|\bwikipedia\b|\bencyclopedia\b"),
        "wikipedia",
    ),
    (
        re.compile(r"\byoutube\b|\bvideos?\b|\bwatch\b|\bplaylists?\b|\btutorials?\b|\bwalkthroughs?\b"),
        "youtube",
    ),
    (
        re.compile(r"\bnews\b|\blatest\b|\btrends?\b|\bcompare\b|\btop\b|\bbest\b|\blist\b|\breviews?\b"),
        "web",
    ),
)


def classify(query: str, rules: Sequence[tuple[re.Pattern[str], ToolName]] = INTENT_RULES) -> list[ToolName]:
    """Map a raw query to an ordered, de-duplicated, non-empty tool list."""
    text = (query or "").lower()
    selected: list[ToolName] = []
    for pattern, tool in rules:
        if tool not in selected and pattern.search(text):
            selected.append(tool)
    return selected or list(DEFAULT_TOOLS)


def normalize_selection(tools: Iterable[str]) -> list[ToolName]:
    """De-duplicate an explicit tool list, keeping first-seen order.

    Raises:
        ValueError: If a name is not one of the known tools.
    """
    selected: list[ToolName] = []
    for tool in tools:
        if tool not in TOOL_NAMES:
            raise ValueError(f"Unknown tool '{tool}'. Available: {', '.join(TOOL_NAMES)}")
        if tool not in selected:
            selected.append(tool)
    return selected
