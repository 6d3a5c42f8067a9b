import time
from typing import Any

from unmessy.domain.validation.port import KnownGoodCache


class InMemoryKnownGoodCache(KnownGoodCache):
    """Process-local known-good cache for single-instance runs and tests.

    Holds at most ``max_entries`` keys. A write into a full cache first drops
    expired entries, then the oldest ones.
    """

    def __init__(self, max_entries: int = 10_000) -> None:
        self.max_entries = max_entries
        self._entries: dict[str, tuple[float, dict[str, Any]]] = {}

    async def get(self, key: str) -> dict[str, Any] | None:
        item = self._entries.get(key)
        if item is None:
            return None
        expires_at, value = item
        if expires_at <= time.monotonic():
            del self._entries[key]
            return None
        return dict(value)

    async def set(self, key: str, value: dict[str, Any], ttl: int) -> None:
        now = time.monotonic()
        self._entries.pop(key, None)
        if len(self._entries) >= self.max_entries:
            self._evict(now)
        self._entries[key] = (now + ttl, dict(value))

    def _evict(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        # Insertion order is write order
        while self._entries and len(self._entries) >= self.max_entries:
            del self._entries[next(iter(self._entries))]

    def __len__(self) -> int:
        return len(self._entries)
