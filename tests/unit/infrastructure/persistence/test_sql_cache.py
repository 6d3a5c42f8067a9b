"""Tests for the SQL known-good cache backend."""

import pytest

from unmessy.infrastructure.cache.sql import SqlKnownGoodCache


class TestSqlKnownGoodCache:
    @pytest.mark.asyncio
    async def test_round_trip(self, session_factory):
        cache = SqlKnownGoodCache(session_factory)

        await cache.set("bob@company.io", {"status": "valid", "check_id": "1"}, ttl=3600)

        assert await cache.get("bob@company.io") == {"status": "valid", "check_id": "1"}
        assert await cache.get("other@company.io") is None

    @pytest.mark.asyncio
    async def test_set_overwrites(self, session_factory):
        cache = SqlKnownGoodCache(session_factory)

        await cache.set("bob@company.io", {"check_id": "1"}, ttl=3600)
        await cache.set("bob@company.io", {"check_id": "2"}, ttl=3600)

        assert await cache.get("bob@company.io") == {"check_id": "2"}

    @pytest.mark.asyncio
    async def test_expired_entry_is_a_miss(self, session_factory):
        cache = SqlKnownGoodCache(session_factory)

        await cache.set("bob@company.io", {"check_id": "1"}, ttl=0)

        assert await cache.get("bob@company.io") is None
