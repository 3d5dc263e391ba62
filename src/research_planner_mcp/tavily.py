"""Tavily web search client.

Never raises: missing credentials, request failures and malformed response
bodies come back as an empty ``WebSearchResult`` with ``error`` set.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from .config import get_config
from .http import post_json
from .models.tools import WebSearchItem, WebSearchResult

logger = logging.getLogger(__name__)

TAVILY_SEARCH_URL = "https://api.tavily.com/search"


def _parse_score(value: Any) -> float | None:
    """Finite numeric relevance, else None. Booleans are not scores."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    score = float(value)
    return score if math.isfinite(score) else None


def _parse_results(data: Any) -> list[WebSearchItem]:
    """Map a Tavily response body to search items, skipping malformed rows.

    Raises:
        ValueError: If the body is not a JSON object or ``results`` is not a list.
    """
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected Tavily response: expected an object, got {type(data).__name__}")
    rows = data.get("results") or []
    if not isinstance(rows, list):
        raise ValueError(f"Unexpected Tavily response: 'results' is {type(rows).__name__}")

    items: list[WebSearchItem] = []
    for row in rows:
        if not isinstance(row, dict):
            logger.debug("Skipping non-object Tavily row: %r", row)
            continue
        items.append(
            WebSearchItem(
                title=str(row.get("title") or ""),
                url=str(row.get("url") or ""),
                content=str(row.get("content") or ""),
                score=_parse_score(row.get("score")),
            )
        )
    return items


async def search_web(query: str, max_results: int = 5) -> WebSearchResult:
    """Run a Tavily search and return the top *max_results* hits."""
    api_key = get_config().tavily_api_key
    if not api_key:
        return WebSearchResult(query=query, error="Missing TAVILY_API_KEY")

    try:
        data = await post_json(
            TAVILY_SEARCH_URL,
            {"api_key": api_key, "query": query, "max_results": max_results},
        )
        results = _parse_results(data)
    except Exception as exc:
        logger.warning("Tavily search failed for %r: %s", query, exc)
        return WebSearchResult(query=query, error=str(exc) or "Search failed")

    return WebSearchResult(query=query, results=results[:max_results])
