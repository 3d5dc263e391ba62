"""Rank, merge and truncate tool results into one bounded answer."""

from __future__ import annotations

from collections.abc import Sequence

from .models.results import ResultItem, SynthesisResult


def rank_items(items: Sequence[ResultItem]) -> list[ResultItem]:
    """Sort by score, highest first; equal scores keep their input order."""
    return sorted(items, key=lambda item: item.rank_score, reverse=True)


def merge_blocks(items: Sequence[ResultItem]) -> str:
    return "\n\n".join(f"From {item.source}:\n{item.text}" for item in items)


def clip_words(text: str, max_words: int) -> str:
    """Keep the first *max_words* whitespace-separated tokens, joined by single spaces."""
    return " ".join(text.split()[:max_words])


def synthesize(items: Sequence[ResultItem], max_words: int) -> SynthesisResult:
    """Merge *items* into one summary bounded by a global word budget.

    The budget applies to the merged text as a whole, so a long
    high-scoring item can crowd out everything after it. ``sources``
    always lists every ranked item, clipped or not.

    Raises:
        ValueError: If *max_words* is negative.
    """
    if max_words < 0:
        raise ValueError(f"max_words must be >= 0, got {max_words}")
    ranked = rank_items(items)
    return SynthesisResult(
        summary=clip_words(merge_blocks(ranked), max_words),
        sources=[item.source for item in ranked],
    )
