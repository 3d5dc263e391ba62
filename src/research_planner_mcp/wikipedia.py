"""Wikipedia REST summary client."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import quote

import httpx

from .config import get_config
from .http import get_json
from .models.tools import WikiSummary

logger = logging.getLogger(__name__)

_LEAD_IN = re.compile(
    r"^(?:what\s+(?:is|are|was|were)\s+|who\s+(?:is|was)\s+|define\s+|definition\s+of\s+|"
    r"(?:an?\s+)?(?:overview|summary)\s+of\s+|tell\s+me\s+about\s+)",
    re.IGNORECASE,
)
_ARTICLE = re.compile(r"^(?:the|a|an)\s+", re.IGNORECASE)
_TRAILING = "?!. "


def summary_url(title: str, lang: str | None = None) -> str:
    """Build the REST ``page/summary`` endpoint for *title*."""
    lang = lang or get_config().wikipedia_lang
    return f"https://{lang}.wikipedia.org/api/rest_v1/page/summary/{quote(title, safe='')}"


def title_from_query(query: str) -> str:
    """Reduce a natural-language query to a plausible article title.

    ``"What is photosynthesis?"`` → ``"Photosynthesis"``. Falls back to the
    stripped query when nothing is left after removing the lead-in.
    """
    text = query.strip()
    title = _ARTICLE.sub("", _LEAD_IN.sub("", text, count=1), count=1).strip().rstrip(_TRAILING)
    if not title:
        return text
    # Wikipedia titles are case-insensitive only in their first character.
    return title[0].upper() + title[1:]


def _summary_from_payload(title: str, data: Any) -> WikiSummary:
    """Build a summary from a REST ``page/summary`` body.

    Raises:
        ValueError: If the body is not a JSON object.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected Wikipedia response: expected an object, got {type(data).__name__}")
    urls = data.get("content_urls")
    desktop = urls.get("desktop") if isinstance(urls, dict) else None
    page_url = desktop.get("page") if isinstance(desktop, dict) else None
    return WikiSummary(
        title=str(data.get("title") or title),
        extract=str(data.get("extract") or ""),
        url=page_url if isinstance(page_url, str) else None,
    )


async def fetch_summary(title: str) -> WikiSummary:
    """Fetch the lead extract for *title*.

    A missing page, transport failure or malformed body yields an
    explanatory extract instead of raising.
    """
    try:
        data = await get_json(summary_url(title))
        summary = _summary_from_payload(title, data)
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.warning("Wikipedia summary for %r returned HTTP %d", title, status)
        return WikiSummary(
            title=title,
            extract=f"Failed to fetch Wikipedia summary: HTTP {status}",
            error=f"HTTP {status}",
        )
    except Exception as exc:
        reason = str(exc) or type(exc).__name__
        logger.warning("Wikipedia summary for %r failed: %s", title, reason)
        return WikiSummary(
            title=title,
            extract=f"Failed to fetch Wikipedia summary: {reason}",
            error=reason,
        )

    return summary
