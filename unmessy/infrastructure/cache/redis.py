import json
from typing import Any

from redis.asyncio import Redis

from unmessy.domain.validation.port import KnownGoodCache


class RedisKnownGoodCache(KnownGoodCache):
    """Known-good cache in Redis. Entries expire through SETEX."""

    def __init__(self, client: Redis, key_prefix: str = "unmessy:known-good:") -> None:
        self._client = client
        self._prefix = key_prefix

    async def get(self, key: str) -> dict[str, Any] | None:
        raw = await self._client.get(self._prefix + key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: dict[str, Any], ttl: int) -> None:
        await self._client.setex(self._prefix + key, ttl, json.dumps(value))
