import asyncio
import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import pydantic

from unmessy.domain.shared.service import Service
from unmessy.domain.validation.error import CacheUnavailable
from unmessy.domain.validation.model import (
    CacheLookup,
    Deadline,
    KnownGoodEntry,
    ValidationResult,
    ValidationStatus,
)
from unmessy.domain.validation.port import KnownGoodCache

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86_400


class KnownGoodCacheGateway(Service):
    """Wraps the known-good cache so that it can only ever speed things up.

    Lookups and writes run under their own timeout. Any failure reads as a
    miss (or a failed write) and is never raised to the orchestrator.
    """

    cache: KnownGoodCache
    timeout: float = 1.5
    freshness_days: int = 7
    ttl_days: int = 30

    async def lookup(self, address: str, deadline: Deadline) -> CacheLookup:
        budget = deadline.budget(self.timeout)
        if budget <= 0:
            return CacheLookup(found=False, error="no time left for cache lookup")

        try:
            value = await self._call(self.cache.get(address), budget, "lookup")
        except CacheUnavailable as e:
            logger.warning("Known-good cache unavailable: %s", e.message)
            return CacheLookup(found=False, error=e.message)

        if value is None:
            return CacheLookup(found=False)

        try:
            entry = KnownGoodEntry.model_validate(value)
        except pydantic.ValidationError as e:
            logger.warning("Discarding undecodable known-good entry: %s", e.error_count())
            return CacheLookup(found=False, error="undecodable cache entry")

        return CacheLookup(found=True, fresh=self.is_fresh(entry), entry=entry)

    async def remember(
        self, address: str, result: ValidationResult, deadline: Deadline | None = None
    ) -> bool:
        """Store a confirmed-valid verdict under ``address``. Returns success.

        Heuristic verdicts (``recheck_needed``) are never stored: a later hit
        would present them as confirmed.
        """
        if result.status != ValidationStatus.VALID or result.recheck_needed:
            return False

        timeout = self.timeout if deadline is None else deadline.budget(self.timeout)
        if timeout <= 0:
            logger.warning("No time left for known-good cache write")
            return False

        entry = KnownGoodEntry(
            address=result.current_address,
            status=result.status,
            sub_status=result.sub_status,
            check_id=result.check_id,
            checked_at=result.checked_at,
        )
        ttl = self.ttl_days * SECONDS_PER_DAY
        try:
            await self._call(
                self.cache.set(address, entry.model_dump(mode="json"), ttl),
                timeout,
                "write",
            )
        except CacheUnavailable as e:
            logger.warning("Known-good cache write failed: %s", e.message)
            return False
        return True

    def is_fresh(self, entry: KnownGoodEntry) -> bool:
        checked_at = entry.checked_at
        if checked_at.tzinfo is None:
            checked_at = checked_at.replace(tzinfo=UTC)
        return datetime.now(UTC) - checked_at < timedelta(days=self.freshness_days)

    @staticmethod
    async def _call(awaitable: Any, timeout: float, operation: str) -> Any:
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except TimeoutError as e:
            raise CacheUnavailable(f"cache {operation} timed out after {timeout:.2f}s") from e
        except Exception as e:
            raise CacheUnavailable(f"cache {operation} failed: {e}") from e
