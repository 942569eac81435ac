"""Per-task correlation state: trace ids and the search group being served."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
import secrets
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from opentelemetry.trace import Span


trace_context: ContextVar[dict[str, str] | None] = ContextVar("lexsearch_trace_context", default=None)


def get_trace_context() -> dict[str, str]:
    """Return the ids bound to the current task, minting a fresh pair on first use."""
    ctx = trace_context.get()
    if not ctx or not ctx.get("trace_id"):
        ctx = dict(ctx or {})
        ctx["trace_id"] = secrets.token_hex(16)
        ctx["span_id"] = ctx.get("span_id") or secrets.token_hex(8)
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: str) -> None:
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def update_span_id(span_id: str) -> None:
    trace_context.set({**(trace_context.get() or {}), "span_id": span_id})


@contextmanager
def bind_group(group: str) -> Iterator[None]:
    """Tag every log record emitted inside the block with ``group``."""
    token = trace_context.set({**get_trace_context(), "group": group})
    try:
        yield
    finally:
        trace_context.reset(token)


def span_ids(span: Span) -> dict[str, str]:
    """Hex-encoded ids of an OpenTelemetry span, in log format."""
    ctx = span.get_span_context()
    return {"trace_id": f"{ctx.trace_id:032x}", "span_id": f"{ctx.span_id:016x}"}
