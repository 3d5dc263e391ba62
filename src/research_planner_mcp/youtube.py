"""YouTube research client — Data API v3 search plus Gemini summaries.

The Data API client (google-api-python-client) is synchronous, so calls
run in ``asyncio.to_thread()``. Each discovered video is summarised from
its metadata by Gemini.
"""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import parse_qs, urlparse

from .client import GeminiClient
from .config import get_config
from .errors import MissingCredentialsError
from .http import get_json
from .models.tools import VideoSummary, YouTubeResearchResult
from .prompts.video import VIDEO_SUMMARY, VIDEO_SUMMARY_SYSTEM

logger = logging.getLogger(__name__)

OEMBED_URL = "https://www.youtube.com/oembed"
_SUMMARY_CONCURRENCY = 3


def _is_youtube_host(host: str) -> bool:
    """Check if host is a youtube.com domain (including subdomains like www.youtube.com)."""
    host = host.lower().split(":", 1)[0]
    return host == "youtube.com" or host.endswith(".youtube.com")


def _is_youtu_be_host(host: str) -> bool:
    host = host.lower().split(":", 1)[0]
    return host in {"youtu.be", "www.youtu.be"}


def extract_video_id(url: str) -> str:
    """Extract the video ID from a youtube.com or youtu.be URL.

    Handles ``watch?v=``, ``youtu.be/<id>`` and ``/shorts|embed|live/<id>``.

    Raises:
        ValueError: If no video ID can be extracted.
    """
    parsed = urlparse(url.replace("\\", ""))
    host = parsed.netloc.lower().split(":", 1)[0]
    vid: str | None = None
    if _is_youtu_be_host(host):
        vid = parsed.path.strip("/").split("/", 1)[0] or None
    elif _is_youtube_host(host):
        vid = parse_qs(parsed.query).get("v", [None])[0]
        if not vid:
            parts = [p for p in parsed.path.split("/") if p]
            if len(parts) >= 2 and parts[0] in {"shorts", "embed", "live"}:
                vid = parts[1]
    if not vid:
        raise ValueError(f"Not a YouTube URL: {url}")
    return vid.split("&")[0].split("?")[0]


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


class YouTubeClient:
    """Singleton YouTube Data API v3 client."""

    _service = None

    @classmethod
    def get(cls):
        """Get or create the YouTube API service (lazy singleton).

        Raises:
            MissingCredentialsError: If ``YOUTUBE_API_KEY`` is not set.
        """
        if cls._service is None:
            api_key = get_config().youtube_api_key
            if not api_key:
                raise MissingCredentialsError("YOUTUBE_API_KEY")
            from googleapiclient.discovery import build

            cls._service = build("youtube", "v3", developerKey=api_key, cache_discovery=False)
        return cls._service

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._service = None

    @classmethod
    async def search(cls, topic: str, max_results: int) -> list[dict]:
        """Search videos by topic. Returns raw ``search().list`` items."""

        def _fetch():
            svc = cls.get()
            return svc.search().list(
                part="snippet",
                type="video",
                q=topic,
                maxResults=max_results,
            ).execute()

        resp = await asyncio.to_thread(_fetch)
        return resp.get("items", [])

    @classmethod
    async def snippet(cls, video_id: str) -> dict:
        """Fetch the ``snippet`` block for one video, or ``{}`` when unknown."""

        def _fetch():
            svc = cls.get()
            return svc.videos().list(part="snippet", id=video_id).execute()

        resp = await asyncio.to_thread(_fetch)
        items = resp.get("items", [])
        return items[0].get("snippet", {}) if items else {}


async def _oembed_metadata(url: str) -> dict:
    """Title and author from the public oEmbed endpoint — no API key needed."""
    try:
        data = await get_json(OEMBED_URL, params={"url": url, "format": "json"})
    except Exception as exc:
        logger.warning("oEmbed lookup failed for %s: %s", url, exc)
        return {}
    return {"title": data.get("title", ""), "channelTitle": data.get("author_name", "")}


async def fetch_video_metadata(url: str) -> dict:
    """Resolve a video's snippet, preferring the Data API and falling back to oEmbed."""
    video_id = extract_video_id(url)
    if get_config().youtube_api_key:
        try:
            snippet = await YouTubeClient.snippet(video_id)
            if snippet:
                return snippet
        except Exception as exc:
            logger.warning("videos().list failed for %s: %s", video_id, exc)
    return await _oembed_metadata(url)


async def summarize_video(title: str, description: str, url: str) -> str:
    """Summarise a video from its metadata. Never raises."""
    prompt = VIDEO_SUMMARY.format(
        title=title or "(unknown)",
        url=url,
        description=description or "(no description provided)",
    )
    try:
        text = await GeminiClient.generate(
            prompt,
            system_instruction=VIDEO_SUMMARY_SYSTEM,
            max_output_tokens=600,
        )
    except MissingCredentialsError as exc:
        return str(exc)
    except Exception as exc:
        logger.warning("Summary failed for %s: %s", url, exc)
        return "Summary not available."
    return text.strip() or "Summary not available."


def _video_from_snippet(video_id: str, snippet: dict, summary: str) -> VideoSummary:
    return VideoSummary(
        video_id=video_id,
        title=snippet.get("title", ""),
        channel_title=snippet.get("channelTitle", ""),
        published_at=snippet.get("publishedAt", ""),
        url=watch_url(video_id),
        summary=summary,
    )


async def research_video_url(url: str) -> YouTubeResearchResult:
    """Summarise a single video given its URL."""
    try:
        video_id = extract_video_id(url)
        snippet = await fetch_video_metadata(url)
        summary = await summarize_video(
            snippet.get("title", ""), snippet.get("description", ""), url,
        )
    except Exception as exc:
        return YouTubeResearchResult(error=f"Failed to summarize video: {exc}")

    video = VideoSummary(
        video_id=video_id,
        title=snippet.get("title") or "(title unknown)",
        channel_title=snippet.get("channelTitle") or "(channel unknown)",
        published_at=snippet.get("publishedAt", ""),
        url=url,
        summary=summary,
    )
    return YouTubeResearchResult(videos=[video])


async def research_videos(topic: str, max_videos: int = 3) -> YouTubeResearchResult:
    """Search videos for *topic* and summarise each one.

    Missing credentials, API failures and empty searches come back as an
    empty result with ``error`` set.
    """
    if not get_config().youtube_api_key:
        return YouTubeResearchResult(error="Missing YOUTUBE_API_KEY. Please set it.")

    try:
        items = await YouTubeClient.search(topic, max_videos)
    except Exception as exc:
        logger.warning("YouTube search failed for %r: %s", topic, exc)
        return YouTubeResearchResult(error=f"Failed to search YouTube: {exc}")

    items = [i for i in items if (i.get("id") or {}).get("videoId")][:max_videos]
    if not items:
        return YouTubeResearchResult(error=f'No videos found for topic: "{topic}"')

    semaphore = asyncio.Semaphore(_SUMMARY_CONCURRENCY)

    async def _summarize(item: dict) -> VideoSummary:
        video_id = item["id"]["videoId"]
        snippet = item.get("snippet") or {}
        async with semaphore:
            summary = await summarize_video(
                snippet.get("title", ""), snippet.get("description", ""), watch_url(video_id),
            )
        return _video_from_snippet(video_id, snippet, summary)

    videos = await asyncio.gather(*[_summarize(i) for i in items])
    return YouTubeResearchResult(videos=list(videos))
