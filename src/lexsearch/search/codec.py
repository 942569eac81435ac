"""Encoding of ordered-set members.

An entry is ``<fragment>::<doc_id>``. Fragments never contain the separator,
so the first separator in an entry is always the boundary and doc ids are free
to contain it. Entries sort by fragment first and then by doc id.
"""

from __future__ import annotations

from lexsearch.errors import InvalidFragmentError


SEPARATOR = "::"
SET_SUFFIX = "-search"
UPPER_SENTINEL = b"\xff"


def set_name(group: str, suffix: str = SET_SUFFIX) -> str:
    """Return the ordered-set key holding the entries of ``group``."""
    return f"{group}{suffix}"


def encode(fragment: str, doc_id: str) -> str:
    if SEPARATOR in fragment:
        raise InvalidFragmentError(f"Fragment {fragment!r} contains the reserved separator {SEPARATOR!r}")
    return f"{fragment}{SEPARATOR}{doc_id}"


def decode(entry: str) -> tuple[str, str]:
    """Split an entry into ``(fragment, doc_id)``."""
    fragment, separator, doc_id = entry.partition(SEPARATOR)
    if not separator:
        raise InvalidFragmentError(f"Entry {entry!r} has no {SEPARATOR!r} separator")
    return fragment, doc_id


def doc_id_of(entry: str) -> str:
    return decode(entry)[1]


def prefix_bounds(prefix: str) -> tuple[bytes, bytes]:
    """Return the inclusive lower and exclusive upper bound for a prefix scan.

    The upper bound is the prefix followed by a single 0xFF byte, which no
    UTF-8 encoded member can contain, so every member starting with the prefix
    sorts below it.
    """

    lower = prefix.encode("utf-8")
    return lower, lower + UPPER_SENTINEL
