"""Port for the known-good cache (key-value store of confirmed verdicts)."""

from abc import abstractmethod
from typing import Any, Protocol

from unmessy.domain.shared.port import Port


class KnownGoodCache(Port, Protocol):
    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None: ...

    @abstractmethod
    async def set(self, key: str, value: dict[str, Any], ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        ...
