"""Optional MLflow tracing for the research planner.

Spans are laid out per request:

    research_planner (TOOL)        ← ``@trace`` on the MCP entry point
    ├── slot:web (TOOL)            ← ``slot_span`` around each fan-out slot
    ├── slot:youtube (TOOL)
    │   └── generate_content       ← google-genai autolog (video summaries)
    └── ...

Each slot span carries the tool name, item count, elapsed time and the
error category when the slot failed or timed out. ``mlflow-tracing`` is an
optional extra; without it, or with ``PLANNER_TRACING_ENABLED=false`` or
no ``MLFLOW_TRACKING_URI``, every helper here is a no-op.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)

try:
    import mlflow
    import mlflow.gemini

    _HAS_MLFLOW = True
except ImportError:
    _HAS_MLFLOW = False


def is_enabled() -> bool:
    """True when mlflow is importable and the config turns tracing on."""
    if not _HAS_MLFLOW:
        return False
    from .config import get_config

    return get_config().tracing_enabled


def trace(
    func: Callable | None = None,
    *,
    name: str | None = None,
    span_type: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Callable:
    """Wrap an MCP tool entry point in a root span; identity when tracing is off."""
    if not is_enabled():
        return func if func is not None else (lambda f: f)
    return mlflow.trace(func, name=name, span_type=span_type, attributes=attributes)


class SlotSpan:
    """Attribute sink for one fan-out slot.

    Attributes are always kept on ``attributes``; they are also pushed to
    the live MLflow span when one is open.
    """

    def __init__(self, span: Any = None) -> None:
        self._span = span
        self.attributes: dict[str, Any] = {}

    def record(self, **attrs: Any) -> None:
        self.attributes.update(attrs)
        if self._span is not None:
            self._span.set_attributes(attrs)


@contextmanager
def slot_span(tool: str, query: str) -> Iterator[SlotSpan]:
    """Open a ``slot:<tool>`` span for one adapter invocation."""
    if not is_enabled():
        yield SlotSpan()
        return
    with mlflow.start_span(name=f"slot:{tool}", span_type="TOOL") as span:
        span.set_inputs({"tool": tool, "query": query})
        yield SlotSpan(span)


def setup() -> None:
    """Point MLflow at the configured server and autolog google-genai calls.

    Setup problems are logged; the server starts either way.
    """
    if not is_enabled():
        return
    from .config import get_config

    cfg = get_config()
    try:
        mlflow.set_tracking_uri(cfg.mlflow_tracking_uri)
        mlflow.set_experiment(cfg.mlflow_experiment_name)
        mlflow.gemini.autolog()
    except Exception:
        logger.warning("Tracing disabled: MLflow setup failed", exc_info=True)
        return
    logger.info("Tracing to %s (experiment %s)", cfg.mlflow_tracking_uri, cfg.mlflow_experiment_name)


def shutdown() -> None:
    """Flush traces still queued for async export."""
    if not is_enabled():
        return
    try:
        mlflow.flush_trace_async_logging()
    except Exception:
        logger.warning("MLflow trace flush failed", exc_info=True)
