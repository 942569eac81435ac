"""Exception types raised by lexsearch."""

from __future__ import annotations


class LexSearchError(Exception):
    """Base class for errors raised by lexsearch itself.

    Failures coming from the ordered-set store are not wrapped; they reach
    the caller as the storage client raised them.
    """


class ConfigurationError(LexSearchError):
    """Raised at construction time when the store target is unusable."""


class InvalidFragmentError(LexSearchError, ValueError):
    """Raised when an index entry cannot be encoded or decoded."""
