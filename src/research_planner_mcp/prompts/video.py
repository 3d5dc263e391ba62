"""Video summary prompt templates.

VIDEO_SUMMARY_SYSTEM — system instruction for the summariser.
VIDEO_SUMMARY — per-video prompt built from YouTube metadata.
    Variables: {title}, {url}, {description}.
"""

from __future__ import annotations

VIDEO_SUMMARY_SYSTEM = "You are an expert YouTube content summarizer."

VIDEO_SUMMARY = """\
Summarize this YouTube video. If the description is short, infer likely key points.
Return a concise 6-10 bullet summary with actionable insights.

Title: {title}
URL: {url}
Description: {description}"""
