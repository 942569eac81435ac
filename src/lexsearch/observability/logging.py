"""JSON log lines correlated with the active trace and search group."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import Any

import orjson

from lexsearch.observability.context import get_trace_context


_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}
_SECRET_KEYS = frozenset({"password", "redis_password", "token", "secret", "authorization"})
_MAX_EXTRA_LEN = 500

PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _encode_default(value: Any) -> Any:
    # Index bounds and raw Redis replies are bytes
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, (Path, BaseException)):
        return str(value)
    return repr(value)


class JsonFormatter(logging.Formatter):
    """Render a record as a single orjson-encoded object.

    Attributes passed through ``extra=`` are copied to the top level, with
    credentials masked and long strings clipped.
    """

    MAX_MESSAGE_LEN = 2000

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_trace_context()
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": _clip(record.getMessage(), self.MAX_MESSAGE_LEN),
            "trace_id": ctx.get("trace_id", ""),
            "span_id": ctx.get("span_id", ""),
        }
        parent, _, component = record.name.rpartition(".")
        if parent:
            payload["component"] = component
        if "group" in ctx:
            payload["group"] = ctx["group"]
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            if key.lower() in _SECRET_KEYS:
                value = "[REDACTED]"
            elif isinstance(value, str):
                value = _clip(value, _MAX_EXTRA_LEN)
            payload[key] = value

        return orjson.dumps(payload, default=_encode_default).decode("utf-8")


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Replace the root handlers with a single stdout handler.

    Args:
        level: Root level name, case-insensitive.
        json_output: Use ``JsonFormatter``; otherwise a plain one-line format.
        logger_levels: Level overrides keyed by logger name.
    """
    root = logging.getLogger()
    root.setLevel(_level(level))
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)

    # Connection pool chatter from redis-py
    logging.getLogger("redis").setLevel(logging.WARNING)
    for name, name_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(_level(name_level))
