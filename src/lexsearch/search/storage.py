"""Ordered string-set storage used to hold index entries.

The index only needs three operations from its backend: add a member, read a
bounded lexicographic range, and drop a whole set. Members are compared as
UTF-8 bytes, the same ordering Redis uses for ``ZRANGEBYLEX`` on zero-scored
sorted sets.
"""

from __future__ import annotations

import bisect
import logging
from typing import Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class OrderedSetStore(Protocol):
    """Backend surface consumed by the indexer and the query path."""

    async def add_member(self, set_name: str, member: str) -> None:  # pragma: no cover - Protocol only
        """Insert ``member`` with score 0; inserting an existing member is a no-op."""

    async def range_by_lex(  # pragma: no cover - Protocol only
        self,
        set_name: str,
        lower: bytes,
        upper: bytes,
        limit: int,
    ) -> list[str]:
        """Return members in ``[lower, upper)`` in ascending byte order, at most ``limit``."""

    async def delete_set(self, set_name: str) -> None:  # pragma: no cover - Protocol only
        """Remove the whole set."""

    async def close(self) -> None:  # pragma: no cover - Protocol only
        """Release connections held by the backend."""


class MemoryOrderedSetStore:
    """Process-local ordered set store backed by sorted byte lists.

    Every operation completes without yielding to the event loop, so each
    call is atomic with respect to other coroutines.
    """

    def __init__(self) -> None:
        self._sets: dict[str, list[bytes]] = {}

    async def add_member(self, set_name: str, member: str) -> None:
        encoded = member.encode("utf-8")
        members = self._sets.setdefault(set_name, [])
        position = bisect.bisect_left(members, encoded)
        if position < len(members) and members[position] == encoded:
            return
        members.insert(position, encoded)

    async def range_by_lex(self, set_name: str, lower: bytes, upper: bytes, limit: int) -> list[str]:
        members = self._sets.get(set_name)
        if not members or limit <= 0:
            return []
        start = bisect.bisect_left(members, lower)
        stop = bisect.bisect_left(members, upper)
        stop = min(stop, start + limit)
        return [member.decode("utf-8") for member in members[start:stop]]

    async def delete_set(self, set_name: str) -> None:
        removed = self._sets.pop(set_name, None)
        if removed is not None:
            logger.debug("Dropped set %s (%d members)", set_name, len(removed))

    async def close(self) -> None:
        self._sets.clear()

    def members(self, set_name: str) -> list[str]:
        """Return every member of a set in order (inspection helper)."""
        return [member.decode("utf-8") for member in self._sets.get(set_name, [])]

    def set_names(self) -> list[str]:
        return sorted(self._sets)
