"""Unit tests for the Redis sorted-set backend against a mocked client."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from lexsearch.config import Settings
from lexsearch.search.redis_storage import RedisOrderedSetStore
from lexsearch.search.storage import OrderedSetStore


@pytest.fixture
def client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def store(client: AsyncMock) -> RedisOrderedSetStore:
    return RedisOrderedSetStore(client)


@pytest.mark.unit
class TestRedisOrderedSetStore:
    def test_satisfies_the_store_protocol(self, store):
        assert isinstance(store, OrderedSetStore)
        assert store.client is not None

    @pytest.mark.asyncio
    async def test_add_member_uses_zero_score(self, store, client):
        await store.add_member("g-search", "fox::1")

        client.zadd.assert_awaited_once_with("g-search", {b"fox::1": 0})

    @pytest.mark.asyncio
    async def test_range_by_lex_sends_inclusive_and_exclusive_bounds(self, store, client):
        client.zrangebylex.return_value = [b"fox::1", "foxé::2".encode()]

        members = await store.range_by_lex("g-search", b"fox", b"fox\xff", 5)

        client.zrangebylex.assert_awaited_once_with("g-search", b"[fox", b"(fox\xff", start=0, num=5)
        assert members == ["fox::1", "foxé::2"]

    @pytest.mark.asyncio
    async def test_zero_limit_skips_the_round_trip(self, store, client):
        assert await store.range_by_lex("g-search", b"", b"\xff", 0) == []
        client.zrangebylex.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_set(self, store, client):
        await store.delete_set("g-search")

        client.delete.assert_awaited_once_with("g-search")

    @pytest.mark.asyncio
    async def test_close_releases_the_client(self, store, client):
        await store.close()

        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_redis_errors_propagate(self, store, client):
        client.zadd.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(RedisConnectionError, match="connection refused"):
            await store.add_member("g-search", "fox::1")


@pytest.mark.unit
class TestFromSettings:
    @pytest.mark.asyncio
    async def test_builds_client_from_settings(self):
        settings = Settings(store_backend="redis", redis_host="cache.local", redis_port=6380, redis_db=2)

        store = RedisOrderedSetStore.from_settings(settings)
        try:
            kwargs = store.client.connection_pool.connection_kwargs
            assert kwargs["host"] == "cache.local"
            assert kwargs["port"] == 6380
            assert kwargs["db"] == 2
            assert kwargs["decode_responses"] is False
        finally:
            await store.close()
