"""Redis sorted-set backend for index entries.

Entries live in zero-scored sorted sets so Redis orders them purely by member
bytes, which is what ``ZRANGEBYLEX`` scans. Redis errors are not caught here:
the caller sees them unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.asyncio import Redis


if TYPE_CHECKING:
    from lexsearch.config import Settings


logger = logging.getLogger(__name__)

_INCLUSIVE = b"["
_EXCLUSIVE = b"("


class RedisOrderedSetStore:
    """``OrderedSetStore`` implementation over ``redis.asyncio``."""

    def __init__(self, client: Redis) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> RedisOrderedSetStore:
        client = Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password,
            decode_responses=False,
        )
        logger.info("Redis ordered-set store targeting %s", settings.redis_target())
        return cls(client)

    @property
    def client(self) -> Redis:
        return self._client

    async def add_member(self, set_name: str, member: str) -> None:
        await self._client.zadd(set_name, {member.encode("utf-8"): 0})

    async def range_by_lex(self, set_name: str, lower: bytes, upper: bytes, limit: int) -> list[str]:
        if limit <= 0:
            return []
        members = await self._client.zrangebylex(
            set_name,
            _INCLUSIVE + lower,
            _EXCLUSIVE + upper,
            start=0,
            num=limit,
        )
        return [member.decode("utf-8") if isinstance(member, bytes) else member for member in members]

    async def delete_set(self, set_name: str) -> None:
        await self._client.delete(set_name)

    async def close(self) -> None:
        await self._client.aclose()
