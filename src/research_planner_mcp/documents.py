"""In-memory document index for retrieval-augmented lookups.

Documents are embedded with a deterministic character-hash vector and
ranked by cosine similarity. The index lives for the lifetime of the
process and is populated through the ``document_index`` tool.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .models.tools import RagHit, RagResult

logger = logging.getLogger(__name__)

EMBEDDING_DIM = 128


def embed(text: str, dim: int = EMBEDDING_DIM) -> list[float]:
    """Fold character codes into a fixed-width vector."""
    vec = [0.0] * dim
    for i, ch in enumerate(text):
        vec[i % dim] += ord(ch) / 255
    return vec


def cosine(a: list[float], b: list[float]) -> float:
    """Cosine similarity; 0.0 when either vector has zero norm."""
    dot = sum(x * y for x, y in zip(a, b))
    na = math.sqrt(sum(x * x for x in a))
    nb = math.sqrt(sum(y * y for y in b))
    if na == 0 or nb == 0:
        return 0.0
    return dot / (na * nb)


@dataclass
class IndexedDocument:
    doc_id: str
    text: str
    embedding: list[float] = field(default_factory=list)


class DocumentIndex:
    """Process-wide document store keyed by document ID."""

    def __init__(self) -> None:
        self._docs: dict[str, IndexedDocument] = {}

    def add(self, doc_id: str, text: str) -> bool:
        """Index *text* under *doc_id*. Returns False when it replaced an existing entry."""
        is_new = doc_id not in self._docs
        self._docs[doc_id] = IndexedDocument(doc_id=doc_id, text=text, embedding=embed(text))
        logger.info("Indexed document %s (%d chars, new=%s)", doc_id, len(text), is_new)
        return is_new

    def search(self, query: str, top_k: int = 3) -> RagResult:
        """Return the *top_k* documents most similar to *query*."""
        q = embed(query)
        scored = sorted(
            (RagHit(id=d.doc_id, text=d.text, score=cosine(q, d.embedding)) for d in self._docs.values()),
            key=lambda h: h.score,
            reverse=True,
        )
        return RagResult(query=query, hits=scored[:top_k])

    def clear(self) -> int:
        """Drop every document. Returns count removed."""
        removed = len(self._docs)
        self._docs.clear()
        return removed

    @property
    def count(self) -> int:
        return len(self._docs)


# Module-level singleton
document_index = DocumentIndex()
