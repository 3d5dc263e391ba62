"""Document retrieval tools — index text and query it by similarity."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..documents import document_index as _index
from ..errors import make_tool_error
from ..tracing import trace
from ..types import QueryParam

documents_server = FastMCP("documents")


@documents_server.tool(
    name="document_index",
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
@trace(name="document_index", span_type="TOOL")
async def index_document(
    doc_id: Annotated[str, Field(min_length=1, description="Stable document ID")],
    text: Annotated[str, Field(min_length=1, description="Document text to index")],
) -> dict:
    """Add or replace a document in the in-memory retrieval index.

    Args:
        doc_id: Identifier reported back as ``rag:<doc_id>``.
        text: Document contents.

    Returns:
        Dict with id, whether it was newly indexed, and the index size.
    """
    try:
        is_new = _index.add(doc_id, text)
        return {"id": doc_id, "indexed": is_new, "total": _index.count}
    except Exception as exc:
        return make_tool_error(exc)


@documents_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="document_rag", span_type="TOOL")
async def document_rag(
    query: QueryParam,
    top_k: Annotated[int, Field(ge=1, le=10, description="Number of documents to return")] = 3,
) -> dict:
    """Retrieve the indexed documents most similar to a query.

    Args:
        query: Text to match.
        top_k: Number of hits (1-10).

    Returns:
        Dict with query and hits (id, text, score), best first.
    """
    try:
        return _index.search(query, top_k).model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)
