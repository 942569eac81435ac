"""lexsearch - prefix full-text search on a lexicographically ordered set store."""

from lexsearch.config import Settings
from lexsearch.engine import LexSearch
from lexsearch.errors import ConfigurationError, InvalidFragmentError, LexSearchError
from lexsearch.search.analyzers import Normalizer
from lexsearch.search.codec import SEPARATOR, decode, doc_id_of, encode, prefix_bounds
from lexsearch.search.models import IndexOptions, IndexStrategy, ManyValues, SingleValue, field_value_from
from lexsearch.search.stopwords import ENGLISH_STOPWORDS
from lexsearch.search.storage import MemoryOrderedSetStore, OrderedSetStore


__version__ = "0.1.0"

__all__ = [
    "ENGLISH_STOPWORDS",
    "SEPARATOR",
    "ConfigurationError",
    "IndexOptions",
    "IndexStrategy",
    "InvalidFragmentError",
    "LexSearch",
    "LexSearchError",
    "ManyValues",
    "MemoryOrderedSetStore",
    "Normalizer",
    "OrderedSetStore",
    "Settings",
    "SingleValue",
    "decode",
    "doc_id_of",
    "encode",
    "field_value_from",
    "prefix_bounds",
]
