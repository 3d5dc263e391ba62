"""Plain-text rendering of tool outputs."""

from __future__ import annotations

from collections.abc import Sequence

from .models.tools import VideoSummary


def render_video(video: VideoSummary) -> str:
    """Multi-line title/channel/url/summary block for one video."""
    lines = [
        video.title or "(untitled video)",
        f"Channel: {video.channel_title}" if video.channel_title else "",
        f"Published: {video.published_at[:10]}" if video.published_at else "",
        f"URL: {video.url}",
        "Summary:",
        video.summary,
    ]
    return "\n".join(line for line in lines if line)


def render_videos(videos: Sequence[VideoSummary]) -> str:
    """Numbered listing of several videos, separated by ``---`` rules."""
    if not videos:
        return "No videos found for the given topic."
    return "\n\n".join(f"#{i} {render_video(v)}\n---" for i, v in enumerate(videos, start=1))
