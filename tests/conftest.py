"""Shared test fixtures and configuration."""

import os

import pytest


# Complete test environment that overrides ALL possible config values
TEST_ENV = {
    "STORE_BACKEND": "memory",
    "REDIS_HOST": "",
    "REDIS_PORT": "6379",
    "REDIS_DB": "0",
    "SEARCH_SET_SUFFIX": "-search",
    "DEFAULT_SEARCH_LIMIT": "10",
    "LOG_LEVEL": "info",
    "LOG_JSON": "false",
    "SERVICE_NAME": "lexsearch-tests",
}


# Set environment variables immediately when conftest.py is loaded
for key, value in TEST_ENV.items():
    os.environ[key] = value

# Now we can safely import config-dependent modules
from lexsearch.config import Settings
from lexsearch.engine import LexSearch
from lexsearch.search.storage import MemoryOrderedSetStore


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset environment variables before each test to the test defaults."""
    monkeypatch.delenv("REDIS_PASSWORD", raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def memory_store() -> MemoryOrderedSetStore:
    return MemoryOrderedSetStore()


@pytest.fixture
def engine(memory_store: MemoryOrderedSetStore) -> LexSearch:
    """Search facade wired to an in-memory store."""
    return LexSearch(Settings(), store=memory_store)
