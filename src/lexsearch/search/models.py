"""Search data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class IndexStrategy(str, Enum):
    """How a field value is turned into index fragments."""

    TOKENIZED = "tokenized"
    NO_TOKENS = "noTokens"


@dataclass(frozen=True)
class IndexOptions:
    """Options controlling a single ``index`` call.

    ``index_trailing_word`` changes the no-token strategy so that the final
    word of a phrase (and therefore a single-word phrase) also gets an entry.
    It is off by default, which keeps the historical ``wordCount - 1`` entries
    per phrase.
    """

    strategy: IndexStrategy = IndexStrategy.TOKENIZED
    id_field: str = "_id"
    index_trailing_word: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.strategy, IndexStrategy):
            object.__setattr__(self, "strategy", IndexStrategy(self.strategy))


@dataclass(frozen=True)
class SingleValue:
    """A field holding one string."""

    text: str

    @property
    def texts(self) -> tuple[str, ...]:
        return (self.text,)


@dataclass(frozen=True)
class ManyValues:
    """A field holding an ordered sequence of strings."""

    items: tuple[str, ...]

    @property
    def texts(self) -> tuple[str, ...]:
        return self.items


FieldValue = SingleValue | ManyValues


def field_value_from(raw: Any) -> FieldValue | None:
    """Classify a raw document value, returning None for non-text values.

    Sequence elements that are not strings are dropped, matching how a
    non-text scalar field is skipped.
    """

    if isinstance(raw, str):
        return SingleValue(raw)
    if isinstance(raw, (list, tuple)):
        return ManyValues(tuple(item for item in raw if isinstance(item, str)))
    return None


@dataclass(frozen=True)
class QueryPlan:
    """Lexicographic range computed for a raw query string."""

    query: str
    prefix: str
    lower: bytes
    upper: bytes
    is_phrase: bool
