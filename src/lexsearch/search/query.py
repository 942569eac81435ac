"""Query planning: raw search string to lexicographic range."""

from __future__ import annotations

import re

from lexsearch.search.analyzers import Normalizer
from lexsearch.search.codec import prefix_bounds
from lexsearch.search.models import QueryPlan


_WHITESPACE = re.compile(r"\s")


def validate_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"Search limit must be a non-negative integer, got {limit!r}")
    if limit < 0:
        raise ValueError(f"Search limit must be a non-negative integer, got {limit}")
    return limit


class QueryPlanner:
    """Choose the search prefix for a query and compute its range bounds.

    A query containing whitespace is a phrase and is matched verbatim
    (lowercased) against no-token entries. Anything else is a single word,
    stemmed the same way tokenized entries were.
    """

    def __init__(self, normalizer: Normalizer | None = None) -> None:
        self._normalizer = normalizer or Normalizer()

    def plan(self, query: str) -> QueryPlan:
        is_phrase = bool(_WHITESPACE.search(query))
        if is_phrase:
            prefix = query.lower()
        else:
            prefix = self._normalizer.normalize_query_word(query)
        lower, upper = prefix_bounds(prefix)
        return QueryPlan(query=query, prefix=prefix, lower=lower, upper=upper, is_phrase=is_phrase)
