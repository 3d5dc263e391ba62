"""Main FastMCP server — mounts all sub-servers."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from . import tracing
from .client import GeminiClient
from .tools.documents import documents_server
from .tools.infra import infra_server
from .tools.planner import planner_server
from .tools.web import web_server
from .tools.wikipedia import wikipedia_server
from .tools.youtube import youtube_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook — tracing setup and shared client teardown."""
    tracing.setup()
    yield {}
    tracing.shutdown()
    closed = await GeminiClient.close_all()
    logger.info("Lifespan shutdown: closed %d client(s)", closed)


app = FastMCP(
    "research-planner",
    instructions=(
        "Research planner — routes a question to web search, Wikipedia, "
        "YouTube, and indexed documents, runs them concurrently, and merges "
        "the results into one ranked, word-bounded summary with sources."
    ),
    lifespan=_lifespan,
)

app.mount(planner_server)
app.mount(web_server)
app.mount(wikipedia_server)
app.mount(youtube_server)
app.mount(documents_server)
app.mount(infra_server)


def main() -> None:
    """Entry-point for ``research-planner-mcp`` console script."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run()


if __name__ == "__main__":
    main()
