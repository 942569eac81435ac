"""Logging, tracing, and metrics for lexsearch."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lexsearch.observability.context import bind_group, get_trace_context, set_trace_context, span_ids, trace_context
from lexsearch.observability.logging import JsonFormatter, configure_logging
from lexsearch.observability.metrics import (
    ENTRIES_WRITTEN,
    SEARCH_LATENCY,
    STORE_ERRORS,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from lexsearch.observability.tracing import create_span, get_tracer, init_tracing


if TYPE_CHECKING:
    from lexsearch.config import Settings


def configure_observability(settings: Settings) -> None:
    """Apply the logging and tracing options of ``settings`` process-wide."""
    configure_logging(settings.log_level, settings.log_json)
    init_tracing(settings.service_name)


__all__ = [
    "ENTRIES_WRITTEN",
    "SEARCH_LATENCY",
    "STORE_ERRORS",
    "JsonFormatter",
    "bind_group",
    "configure_logging",
    "configure_observability",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "set_trace_context",
    "span_ids",
    "trace_context",
    "track_latency",
]
