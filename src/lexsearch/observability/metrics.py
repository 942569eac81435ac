"""Index and search metrics, recorded in Prometheus and mirrored to OpenTelemetry.

Prometheus collectors live in the default registry so ``get_metrics()`` can
render them; each one is paired with an OpenTelemetry instrument of the same
name that is created lazily on first use, so nothing is exported unless the
host application installs a meter provider.
"""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING, Any

from opentelemetry import metrics as otel_metrics
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Iterator


_meter_holder: dict[str, Any] = {"meter": None}


def _get_meter():
    if _meter_holder["meter"] is None:
        _meter_holder["meter"] = otel_metrics.get_meter("lexsearch")
    return _meter_holder["meter"]


class MetricBridge:
    """A Prometheus collector paired with a lazily created OTel instrument."""

    _INSTRUMENT_FACTORIES = {
        "counter": "create_counter",
        "histogram": "create_histogram",
    }

    def __init__(
        self,
        prom_metric: Counter | Histogram,
        *,
        name: str,
        description: str,
        otel_kind: str,
    ) -> None:
        self._prom_metric = prom_metric
        self.name = name
        self.description = description
        self._otel_kind = otel_kind
        self._otel_instrument = None

    @classmethod
    def counter(cls, name: str, description: str, labelnames: list[str]) -> MetricBridge:
        return cls(Counter(name, description, labelnames), name=name, description=description, otel_kind="counter")

    @classmethod
    def histogram(
        cls,
        name: str,
        description: str,
        labelnames: list[str],
        buckets: tuple[float, ...],
    ) -> MetricBridge:
        prom_metric = Histogram(name, description, labelnames, buckets=buckets)
        return cls(prom_metric, name=name, description=description, otel_kind="histogram")

    def labels(self, **labels: str) -> BoundMetric:
        return BoundMetric(self, labels)

    def _ensure_otel_instrument(self):
        if self._otel_instrument is None:
            factory_name = self._INSTRUMENT_FACTORIES.get(self._otel_kind)
            if factory_name is None:
                raise ValueError(f"Unknown metric kind: {self._otel_kind}")
            factory = getattr(_get_meter(), factory_name)
            self._otel_instrument = factory(self.name, description=self.description)
        return self._otel_instrument

    def inc(self, labels: dict[str, str], amount: float) -> None:
        self._prom_metric.labels(**labels).inc(amount)
        self._ensure_otel_instrument().add(amount, labels)

    def observe(self, labels: dict[str, str], value: float) -> None:
        self._prom_metric.labels(**labels).observe(value)
        self._ensure_otel_instrument().record(value, labels)


class BoundMetric:
    """A bridge with its label values fixed."""

    def __init__(self, bridge: MetricBridge, labels: dict[str, str]) -> None:
        self._bridge = bridge
        self._labels = labels

    def inc(self, amount: float = 1.0) -> None:
        self._bridge.inc(self._labels, amount)

    def observe(self, value: float) -> None:
        self._bridge.observe(self._labels, value)


ENTRIES_WRITTEN = MetricBridge.counter(
    "lexsearch_entries_written_total",
    "Index entries acknowledged by the store",
    ["group", "strategy"],
)

SEARCH_LATENCY = MetricBridge.histogram(
    "lexsearch_search_latency_seconds",
    "Prefix search latency",
    ["group"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)

STORE_ERRORS = MetricBridge.counter(
    "lexsearch_store_errors_total",
    "Ordered-set store failures",
    ["operation"],
)


@contextmanager
def track_latency(histogram: MetricBridge, **labels: str) -> Iterator[None]:
    """Observe the wall time of the block, whether or not it raises."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Prometheus exposition text for the default registry."""
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
