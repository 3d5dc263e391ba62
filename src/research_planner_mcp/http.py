"""Shared async HTTP helpers for the REST-backed tools."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import get_config
from .retry import with_retry

logger = logging.getLogger(__name__)

USER_AGENT = "research-planner-mcp/1.0"


def _client() -> httpx.AsyncClient:
    """Build a short-lived client with the shared user agent and timeout."""
    return httpx.AsyncClient(
        timeout=get_config().http_timeout_seconds,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        follow_redirects=True,
    )


async def get_json(url: str, *, params: dict[str, Any] | None = None) -> Any:
    """GET *url* and decode the JSON body, retrying transient failures.

    Raises:
        httpx.HTTPStatusError: On a non-2xx response after retries.
        httpx.TransportError: On network failure after retries.
    """

    async def _once() -> Any:
        async with _client() as client:
            resp = await client.get(url, params=params)
            logger.debug("GET %s -> %d", resp.url, resp.status_code)
            resp.raise_for_status()
            return resp.json()

    return await with_retry(_once)


async def post_json(url: str, payload: dict[str, Any]) -> Any:
    """POST a JSON *payload* and decode the JSON response, retrying transient failures."""

    async def _once() -> Any:
        async with _client() as client:
            resp = await client.post(url, json=payload)
            logger.debug("POST %s -> %d", resp.url, resp.status_code)
            resp.raise_for_status()
            return resp.json()

    return await with_retry(_once)
