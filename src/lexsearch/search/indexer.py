"""Document indexing into a group's ordered set.

Each string value of each requested field becomes a handful of index
entries, and every entry is written to the store as an independent
coroutine. Writes fan out at three levels (field keys, the elements of a
multi-valued field, the fragments of one string) and each level joins on all
of its children before reporting. A failed write never cancels its siblings;
once everything has settled the first error is re-raised unchanged. Entries
that were already acknowledged are not rolled back.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable, Mapping, Sequence
import logging
from typing import Any, TypeVar

from lexsearch.observability.metrics import STORE_ERRORS
from lexsearch.search.analyzers import Normalizer
from lexsearch.search.codec import SET_SUFFIX, encode, set_name
from lexsearch.search.models import IndexOptions, IndexStrategy, field_value_from
from lexsearch.search.storage import OrderedSetStore


logger = logging.getLogger(__name__)

T = TypeVar("T")


async def join_all(awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """Await every awaitable, then raise the first failure if there was one."""

    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results  # type: ignore[return-value]


def phrase_suffixes(phrase: str, *, include_last_word: bool = False) -> list[str]:
    """Return the lowercased phrase followed by each suffix after a leading word is dropped.

    Words are separated by single spaces. By default the loop stops before the
    final word, so ``"red fox jumps"`` yields ``["red fox jumps", "fox jumps"]``
    and a one-word phrase yields nothing.
    """

    word_count = len(phrase.split(" "))
    rounds = word_count if include_last_word else word_count - 1
    fragments: list[str] = []
    remaining = phrase
    for _ in range(rounds):
        if remaining:
            fragments.append(remaining.lower())
        remaining = remaining[remaining.find(" ") + 1 :]
    return fragments


class Indexer:
    """Write the entries derived from a document's fields into a group's set."""

    def __init__(
        self,
        store: OrderedSetStore,
        *,
        normalizer: Normalizer | None = None,
        set_suffix: str = SET_SUFFIX,
    ) -> None:
        self._store = store
        self._normalizer = normalizer or Normalizer()
        self._set_suffix = set_suffix

    def fragments_for(self, text: str, options: IndexOptions) -> list[str]:
        """Return the searchable fragments one string contributes."""
        if options.strategy is IndexStrategy.NO_TOKENS:
            return phrase_suffixes(text, include_last_word=options.index_trailing_word)
        return self._normalizer.normalize(text)

    async def index(
        self,
        group: str,
        document: Mapping[str, Any],
        field_keys: Sequence[str],
        options: IndexOptions | None = None,
    ) -> int:
        """Index ``field_keys`` of ``document`` and return the number of entries written.

        Existing entries for the document are left in place; re-indexing a
        changed document requires dropping the group first.

        Raises:
            KeyError: The document has no value under ``options.id_field``.
            InvalidFragmentError: A phrase contains the entry separator.
        """

        options = options or IndexOptions()
        if not field_keys:
            return 0

        doc_id = str(document[options.id_field])
        key = set_name(group, self._set_suffix)
        counts = await join_all(
            self._index_field(key, doc_id, field_key, document.get(field_key), options) for field_key in field_keys
        )
        written = sum(counts)
        logger.debug("Indexed %d entries for %s into %s", written, doc_id, key)
        return written

    async def _index_field(
        self,
        key: str,
        doc_id: str,
        field_key: str,
        raw: Any,
        options: IndexOptions,
    ) -> int:
        value = field_value_from(raw)
        if value is None:
            if raw is not None:
                logger.debug("Skipping non-text field %s on %s (%s)", field_key, doc_id, type(raw).__name__)
            return 0
        counts = await join_all(self._index_text(key, doc_id, text, options) for text in value.texts)
        return sum(counts)

    async def _index_text(self, key: str, doc_id: str, text: str, options: IndexOptions) -> int:
        entries = [encode(fragment, doc_id) for fragment in self.fragments_for(text, options)]
        await join_all(self._write(key, entry) for entry in entries)
        return len(entries)

    async def _write(self, key: str, entry: str) -> None:
        try:
            await self._store.add_member(key, entry)
        except Exception:
            STORE_ERRORS.labels(operation="add_member").inc()
            raise
