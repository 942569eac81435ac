"""Analyzer utilities that turn free text into index tokens.

The normalizer is a small composable pipeline: a humanize pass trims
and collapses separators, a regex tokenizer emits ``\\w+`` runs, and token
filters lowercase, drop stopwords and stem. Stopword membership is checked on
the lowercased, unstemmed token; stemming runs last.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol

from nltk.stem.porter import PorterStemmer

from lexsearch.search.stopwords import ENGLISH_STOPWORDS


_SEPARATOR_RUN = re.compile(r"[-\s]+")

@dataclass
class Token:
    """Represents a token emitted by the tokenizer."""

    text: str
    position: int

    def copy_with(self, text: str) -> Token:
        return Token(text=text, position=self.position)


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


def humanize(text: str) -> str:
    """Trim ``text``, collapse hyphen and whitespace runs to one space, and lowercase it.

    A single word passes through unchanged apart from case, so a document
    word and the same word typed as a query normalize identically.
    ``"node_id"`` and ``"iPhone"`` stay whole words.
    """

    return _SEPARATOR_RUN.sub(" ", text.strip()).lower()


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens."""

    def __init__(self, pattern: str = r"\w+", flags: int = re.UNICODE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(text=match.group(0), position=position)


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Collection[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else ENGLISH_STOPWORDS
        self.stopwords = frozenset(word.lower() for word in vocab)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text not in self.stopwords:
                yield token


def build_porter_stemmer() -> Callable[[str], str]:
    """Return Martin Porter's original stemming algorithm as a callable."""

    stemmer = PorterStemmer(mode=PorterStemmer.ORIGINAL_ALGORITHM)

    def stem(word: str) -> str:
        if not word:
            return word
        return stemmer.stem(word)

    return stem


class PorterStemFilter:
    """Applies the Porter stemmer and drops tokens that stem to nothing."""

    def __init__(self, stem: Callable[[str], str] | None = None) -> None:
        self._stem = stem or build_porter_stemmer()

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            stemmed = self._stem(token.text)
            if stemmed:
                yield token.copy_with(text=stemmed)


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        return list(stream)


class Normalizer:
    """Turns a field value into the stemmed, stopword-free tokens that get indexed."""

    def __init__(
        self,
        *,
        stopwords: Collection[str] | None = None,
        stem: Callable[[str], str] | None = None,
    ) -> None:
        self._stem = stem or build_porter_stemmer()
        self.pipeline = AnalyzerPipeline(
            RegexTokenizer(),
            [LowercaseFilter(), StopFilter(stopwords), PorterStemFilter(self._stem)],
        )

    def __call__(self, text: str) -> list[str]:
        return self.normalize(text)

    def normalize(self, text: str) -> list[str]:
        """Return the index tokens for ``text`` in their original order."""
        return [token.text for token in self.pipeline(humanize(text))]

    def normalize_query_word(self, word: str) -> str:
        """Stem then lowercase a single query word.

        Query words are not stopword-filtered: a search for a stopword simply
        finds nothing rather than failing.
        """
        return self._stem(word).lower()
