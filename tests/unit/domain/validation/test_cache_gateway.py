"""Unit tests for KnownGoodCacheGateway."""

import time
from datetime import UTC, datetime, timedelta

import pytest

from unmessy.domain.validation.model import (
    Deadline,
    KnownGoodEntry,
    ValidationResult,
    ValidationStatus,
)
from unmessy.domain.validation.service import KnownGoodCacheGateway


def _result(
    status: ValidationStatus = ValidationStatus.VALID, recheck_needed: bool | None = None
) -> ValidationResult:
    if recheck_needed is None:
        recheck_needed = status != ValidationStatus.VALID
    return ValidationResult(
        original_address="Bob@Company.io",
        current_address="bob@company.io",
        format_valid=True,
        status=status,
        recheck_needed=recheck_needed,
        check_id="00012300042252100",
        checked_at=datetime.now(UTC),
    )


def _stored(age: timedelta) -> dict:
    return KnownGoodEntry(
        address="bob@company.io",
        status=ValidationStatus.VALID,
        check_id="00012300042252100",
        checked_at=datetime.now(UTC) - age,
    ).model_dump(mode="json")


class TestLookup:
    @pytest.mark.asyncio
    async def test_miss(self, cache):
        gateway = KnownGoodCacheGateway(cache=cache)

        lookup = await gateway.lookup("bob@company.io", Deadline.after(1))

        assert lookup.found is False
        assert lookup.error is None
        assert cache.gets == ["bob@company.io"]

    @pytest.mark.asyncio
    async def test_fresh_hit(self, cache):
        cache.store["bob@company.io"] = _stored(timedelta(days=1))
        gateway = KnownGoodCacheGateway(cache=cache)

        lookup = await gateway.lookup("bob@company.io", Deadline.after(1))

        assert lookup.found is True
        assert lookup.fresh is True
        assert lookup.entry.address == "bob@company.io"

    @pytest.mark.asyncio
    async def test_stale_hit(self, cache):
        cache.store["bob@company.io"] = _stored(timedelta(days=8))
        gateway = KnownGoodCacheGateway(cache=cache, freshness_days=7)

        lookup = await gateway.lookup("bob@company.io", Deadline.after(1))

        assert lookup.found is True
        assert lookup.fresh is False

    @pytest.mark.asyncio
    async def test_timeout_reads_as_miss(self, cache):
        cache.delay = 1.0
        gateway = KnownGoodCacheGateway(cache=cache, timeout=0.05)

        lookup = await gateway.lookup("bob@company.io", Deadline.after(5))

        assert lookup.found is False
        assert "timed out" in lookup.error

    @pytest.mark.asyncio
    async def test_deadline_caps_lookup(self, cache):
        cache.delay = 1.0
        gateway = KnownGoodCacheGateway(cache=cache, timeout=5.0)

        lookup = await gateway.lookup("bob@company.io", Deadline.after(0.05))

        assert lookup.found is False
        assert "timed out" in lookup.error

    @pytest.mark.asyncio
    async def test_expired_deadline_skips_the_call(self, cache):
        gateway = KnownGoodCacheGateway(cache=cache)

        lookup = await gateway.lookup("bob@company.io", Deadline.after(0))

        assert lookup.found is False
        assert cache.gets == []

    @pytest.mark.asyncio
    async def test_backend_error_reads_as_miss(self, cache):
        cache.error = ConnectionError("connection refused")
        gateway = KnownGoodCacheGateway(cache=cache)

        lookup = await gateway.lookup("bob@company.io", Deadline.after(1))

        assert lookup.found is False
        assert "connection refused" in lookup.error

    @pytest.mark.asyncio
    async def test_undecodable_entry_reads_as_miss(self, cache):
        cache.store["bob@company.io"] = {"unexpected": True}
        gateway = KnownGoodCacheGateway(cache=cache)

        lookup = await gateway.lookup("bob@company.io", Deadline.after(1))

        assert lookup.found is False
        assert lookup.error == "undecodable cache entry"


class TestRemember:
    @pytest.mark.asyncio
    async def test_stores_valid_result_with_ttl(self, cache):
        gateway = KnownGoodCacheGateway(cache=cache, ttl_days=30)

        assert await gateway.remember("bob@company.io", _result()) is True

        assert cache.sets == [("bob@company.io", 30 * 86_400)]
        stored = KnownGoodEntry.model_validate(cache.store["bob@company.io"])
        assert stored.check_id == "00012300042252100"
        assert stored.status == ValidationStatus.VALID

    @pytest.mark.asyncio
    async def test_ignores_non_valid_results(self, cache):
        gateway = KnownGoodCacheGateway(cache=cache)

        assert await gateway.remember("bob@company.io", _result(ValidationStatus.UNKNOWN)) is False
        assert cache.sets == []

    @pytest.mark.asyncio
    async def test_ignores_valid_that_needs_recheck(self, cache):
        gateway = KnownGoodCacheGateway(cache=cache)

        assert await gateway.remember("me@gmail.com", _result(recheck_needed=True)) is False
        assert cache.sets == []

    @pytest.mark.asyncio
    async def test_deadline_caps_the_write(self, cache):
        cache.set_delay = 1.0
        gateway = KnownGoodCacheGateway(cache=cache, timeout=2.0)

        start = time.monotonic()
        stored = await gateway.remember("bob@company.io", _result(), Deadline.after(0.05))

        assert stored is False
        assert time.monotonic() - start < 0.5
        assert cache.sets == []

    @pytest.mark.asyncio
    async def test_write_failure_returns_false(self, cache):
        cache.error = ConnectionError("down")
        gateway = KnownGoodCacheGateway(cache=cache)

        assert await gateway.remember("bob@company.io", _result()) is False


class TestFreshness:
    def test_naive_timestamps_are_treated_as_utc(self, cache):
        gateway = KnownGoodCacheGateway(cache=cache, freshness_days=7)
        entry = KnownGoodEntry(
            address="bob@company.io",
            status=ValidationStatus.VALID,
            check_id="00012300042252100",
            checked_at=datetime.now(UTC).replace(tzinfo=None) - timedelta(days=1),
        )

        assert gateway.is_fresh(entry) is True
