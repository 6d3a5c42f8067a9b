"""DI provider for the known-good cache backend."""

from typing import AsyncIterable

from dishka import provide
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from unmessy.config import Config
from unmessy.domain.validation.port import KnownGoodCache
from unmessy.infrastructure.cache.memory import InMemoryKnownGoodCache
from unmessy.infrastructure.cache.redis import RedisKnownGoodCache
from unmessy.infrastructure.cache.sql import SqlKnownGoodCache
from unmessy.util.di.base import Provider
from unmessy.util.di.scope import Scope


class CacheProvider(Provider):
    """Selects the known-good cache adapter from ``cache.backend``."""

    @provide(scope=Scope.APP)
    async def get_known_good_cache(
        self,
        config: Config,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> AsyncIterable[KnownGoodCache]:
        match config.cache.backend:
            case "redis":
                client = Redis.from_url(config.cache.redis_url, decode_responses=True)
                yield RedisKnownGoodCache(client, key_prefix=config.cache.key_prefix)
                await client.aclose()
            case "memory":
                yield InMemoryKnownGoodCache(max_entries=config.cache.memory_max_entries)
            case _:
                yield SqlKnownGoodCache(session_factory)
