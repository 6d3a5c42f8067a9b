from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from unmessy.domain.validation.port import KnownGoodCache
from unmessy.infrastructure.persistence.tables import known_good_cache_table


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class SqlKnownGoodCache(KnownGoodCache):
    """Known-good cache stored in the application database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> dict[str, Any] | None:
        stmt = select(
            known_good_cache_table.c.value, known_good_cache_table.c.expires_at
        ).where(known_good_cache_table.c.key == key)
        async with self._session_factory() as session:
            row = (await session.execute(stmt)).first()
        if row is None or _aware(row.expires_at) <= datetime.now(UTC):
            return None
        return row.value

    async def set(self, key: str, value: dict[str, Any], ttl: int) -> None:
        now = datetime.now(UTC)
        values = {"value": value, "expires_at": now + timedelta(seconds=ttl), "updated_at": now}

        async with self._session_factory() as session, session.begin():
            stmt = select(known_good_cache_table.c.key).where(known_good_cache_table.c.key == key)
            if (await session.execute(stmt)).first():
                await session.execute(
                    update(known_good_cache_table)
                    .where(known_good_cache_table.c.key == key)
                    .values(**values)
                )
            else:
                await session.execute(insert(known_good_cache_table).values(key=key, **values))
