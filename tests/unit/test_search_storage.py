"""Unit tests for the in-memory ordered set store."""

import pytest

from lexsearch.search.codec import prefix_bounds
from lexsearch.search.storage import MemoryOrderedSetStore, OrderedSetStore


async def _fill(store: MemoryOrderedSetStore, set_name: str, members: list[str]) -> None:
    for member in members:
        await store.add_member(set_name, member)


@pytest.mark.unit
class TestMemoryOrderedSetStore:
    def test_satisfies_the_store_protocol(self, memory_store):
        assert isinstance(memory_store, OrderedSetStore)

    @pytest.mark.asyncio
    async def test_members_are_kept_in_byte_order(self, memory_store):
        await _fill(memory_store, "s", ["fox::2", "Fox::1", "fox jumps::1", "ant::9"])

        assert memory_store.members("s") == ["Fox::1", "ant::9", "fox jumps::1", "fox::2"]

    @pytest.mark.asyncio
    async def test_adding_an_existing_member_is_a_no_op(self, memory_store):
        await _fill(memory_store, "s", ["fox::1", "fox::1"])

        assert memory_store.members("s") == ["fox::1"]

    @pytest.mark.asyncio
    async def test_range_is_inclusive_below_and_exclusive_above(self, memory_store):
        await _fill(memory_store, "s", ["a::1", "b::1", "c::1"])

        assert await memory_store.range_by_lex("s", b"b::1", b"c::1", 10) == ["b::1"]

    @pytest.mark.asyncio
    async def test_prefix_range_includes_non_ascii_members(self, memory_store):
        await _fill(memory_store, "s", ["fox::1", "foxé::2", "foy::3", "fo::4"])
        lower, upper = prefix_bounds("fox")

        assert await memory_store.range_by_lex("s", lower, upper, 10) == ["fox::1", "foxé::2"]

    @pytest.mark.asyncio
    async def test_range_is_bounded_by_limit(self, memory_store):
        await _fill(memory_store, "s", [f"fox::{n}" for n in range(5)])
        lower, upper = prefix_bounds("fox")

        assert await memory_store.range_by_lex("s", lower, upper, 2) == ["fox::0", "fox::1"]

    @pytest.mark.asyncio
    async def test_zero_limit_returns_nothing(self, memory_store):
        await _fill(memory_store, "s", ["fox::1"])

        assert await memory_store.range_by_lex("s", b"", b"\xff", 0) == []

    @pytest.mark.asyncio
    async def test_missing_set_reads_as_empty(self, memory_store):
        assert await memory_store.range_by_lex("absent", b"", b"\xff", 10) == []
        assert memory_store.members("absent") == []

    @pytest.mark.asyncio
    async def test_delete_set_only_drops_that_set(self, memory_store):
        await _fill(memory_store, "a-search", ["fox::1"])
        await _fill(memory_store, "b-search", ["fox::2"])

        await memory_store.delete_set("a-search")
        await memory_store.delete_set("never-existed")

        assert memory_store.set_names() == ["b-search"]

    @pytest.mark.asyncio
    async def test_close_clears_everything(self, memory_store):
        await _fill(memory_store, "s", ["fox::1"])

        await memory_store.close()

        assert memory_store.set_names() == []
