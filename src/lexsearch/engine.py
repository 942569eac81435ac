"""Public entry point: index documents and run prefix searches per group."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import fields
import logging
from typing import Any

from lexsearch.config import Settings
from lexsearch.observability.context import bind_group
from lexsearch.observability.metrics import ENTRIES_WRITTEN, SEARCH_LATENCY, STORE_ERRORS, track_latency
from lexsearch.observability.tracing import create_span
from lexsearch.search.analyzers import Normalizer
from lexsearch.search.codec import doc_id_of, set_name
from lexsearch.search.indexer import Indexer
from lexsearch.search.models import IndexOptions
from lexsearch.search.query import QueryPlanner, validate_limit
from lexsearch.search.storage import OrderedSetStore
from lexsearch.search.storage_factory import create_ordered_set_store


logger = logging.getLogger(__name__)

ALL_GROUPS = "_all"
_OPTION_NAMES = frozenset(field.name for field in fields(IndexOptions))


class LexSearch:
    """Prefix search over documents indexed into per-group ordered sets.

    Each group owns one ordered set named ``<group>-search``. Documents are
    never stored; only the entries derived from their fields are, and a
    search returns those raw entries (``<fragment>::<doc_id>``).

    Args:
        settings: Configuration; loaded from the environment when omitted.
        store: Explicit backend. When omitted, the backend is built from
            ``settings`` and a missing Redis host raises ``ConfigurationError``.
        normalizer: Token pipeline shared by indexing and query planning.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        store: OrderedSetStore | None = None,
        normalizer: Normalizer | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._store = store if store is not None else create_ordered_set_store(self.settings)
        self._normalizer = normalizer or Normalizer()
        self._indexer = Indexer(self._store, normalizer=self._normalizer, set_suffix=self.settings.search_set_suffix)
        self._planner = QueryPlanner(self._normalizer)

    @property
    def store(self) -> OrderedSetStore:
        return self._store

    @property
    def planner(self) -> QueryPlanner:
        return self._planner

    def set_name(self, group: str) -> str:
        return set_name(group, self.settings.search_set_suffix)

    def _metric_group(self, group: str) -> str:
        return group if self.settings.metrics_group_label else ALL_GROUPS

    async def index(
        self,
        group: str,
        document: Mapping[str, Any],
        field_keys: Sequence[str],
        options: IndexOptions | Mapping[str, Any] | None = None,
    ) -> int:
        """Index the given fields of ``document`` and return the number of entries written.

        ``options`` may be an ``IndexOptions`` or a mapping of its fields, for
        example ``{"strategy": "noTokens"}``.
        """

        resolved = _resolve_options(options)
        with (
            bind_group(group),
            create_span(
                "lexsearch.index",
                attributes={"lexsearch.group": group, "lexsearch.strategy": resolved.strategy.value},
            ) as span,
        ):
            try:
                written = await self._indexer.index(group, document, field_keys, resolved)
            except Exception as exc:
                logger.error("Indexing into group %s failed: %s", group, exc)
                raise
            span.set_attribute("lexsearch.entries_written", written)
        if written:
            ENTRIES_WRITTEN.labels(group=self._metric_group(group), strategy=resolved.strategy.value).inc(written)
        return written

    async def search(self, group: str, query: str, limit: int | None = None) -> list[str]:
        """Return matching entries in ascending lexicographic order, at most ``limit``."""

        resolved_limit = validate_limit(self.settings.default_search_limit if limit is None else limit)
        plan = self._planner.plan(query)
        key = self.set_name(group)
        with (
            bind_group(group),
            create_span(
                "lexsearch.search",
                attributes={"lexsearch.group": group, "lexsearch.phrase": plan.is_phrase},
            ) as span,
            track_latency(SEARCH_LATENCY, group=self._metric_group(group)),
        ):
            try:
                entries = await self._store.range_by_lex(key, plan.lower, plan.upper, resolved_limit)
            except Exception as exc:
                STORE_ERRORS.labels(operation="range_by_lex").inc()
                logger.error("Search in group %s failed: %s", group, exc)
                raise
            span.set_attribute("lexsearch.matches", len(entries))
        logger.debug("Query %r -> prefix %r matched %d entries in %s", query, plan.prefix, len(entries), key)
        return entries

    async def search_ids(self, group: str, query: str, limit: int | None = None) -> list[str]:
        """Return the distinct doc ids of matching entries, in first-seen order.

        ``limit`` bounds the entries scanned, not the ids returned.
        """

        doc_ids = dict.fromkeys(doc_id_of(entry) for entry in await self.search(group, query, limit))
        return list(doc_ids)

    async def delete(self, group: str) -> None:
        """Drop every entry of ``group``."""

        key = self.set_name(group)
        with bind_group(group), create_span("lexsearch.delete", attributes={"lexsearch.group": group}):
            try:
                await self._store.delete_set(key)
            except Exception as exc:
                STORE_ERRORS.labels(operation="delete_set").inc()
                logger.error("Deleting group %s failed: %s", group, exc)
                raise
        logger.info("Deleted search set %s", key)

    async def close(self) -> None:
        await self._store.close()

    async def __aenter__(self) -> LexSearch:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


def _resolve_options(options: IndexOptions | Mapping[str, Any] | None) -> IndexOptions:
    if options is None:
        return IndexOptions()
    if isinstance(options, IndexOptions):
        return options
    unknown = sorted(set(options) - _OPTION_NAMES)
    if unknown:
        raise ValueError(f"Unknown index option(s): {', '.join(unknown)}")
    return IndexOptions(**dict(options))
