"""Storage factory for choosing between the Redis and in-memory backends."""

from __future__ import annotations

from lexsearch.config import Settings
from lexsearch.errors import ConfigurationError
from lexsearch.search.redis_storage import RedisOrderedSetStore
from lexsearch.search.storage import MemoryOrderedSetStore, OrderedSetStore


def create_ordered_set_store(settings: Settings) -> OrderedSetStore:
    """Create the backend selected by ``settings.store_backend``.

    Raises:
        ConfigurationError: The Redis backend is selected but no host is set.
    """

    if settings.is_memory_backend():
        return MemoryOrderedSetStore()
    if not settings.redis_host.strip():
        raise ConfigurationError("Invalid host")
    return RedisOrderedSetStore.from_settings(settings)
