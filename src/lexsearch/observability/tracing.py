"""OpenTelemetry spans around index, search, and delete calls."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import SpanKind, Status, StatusCode

from lexsearch.observability.context import span_ids, update_span_id


if TYPE_CHECKING:
    from collections.abc import Iterator

    from opentelemetry.trace import Span, Tracer


logger = logging.getLogger(__name__)

TRACER_NAME = "lexsearch"

_tracer_holder: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(
    service_name: str = "lexsearch",
    resource_attributes: dict[str, str] | None = None,
) -> TracerProvider:
    """Install an SDK tracer provider tagged with ``service_name``.

    Exporters are left to the host application; it can attach span
    processors to the returned provider.
    """
    provider = TracerProvider(resource=Resource.create({"service.name": service_name, **(resource_attributes or {})}))
    trace.set_tracer_provider(provider)
    _tracer_holder["tracer"] = provider.get_tracer(TRACER_NAME)
    logger.info("Tracing initialized for service %s", service_name)
    return provider


def get_tracer() -> Tracer:
    tracer = _tracer_holder["tracer"]
    if tracer is None:
        # Whatever provider is registered globally; a no-op one by default
        tracer = trace.get_tracer(TRACER_NAME)
        _tracer_holder["tracer"] = tracer
    return tracer


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Open a span as the current span and mirror its id into the log context.

    An exception leaving the block marks the span as failed before it
    propagates.
    """
    with get_tracer().start_as_current_span(
        name,
        kind=kind,
        attributes=attributes,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        if span.get_span_context().is_valid:
            update_span_id(span_ids(span)["span_id"])
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise
