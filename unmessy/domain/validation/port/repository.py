from abc import abstractmethod
from typing import Protocol

from unmessy.domain.shared.port import Port
from unmessy.domain.validation.model import PersistOutcome, ValidationRecord


class ValidationRecordRepository(Port, Protocol):
    @abstractmethod
    async def get(self, email: str) -> ValidationRecord | None: ...

    @abstractmethod
    async def upsert(self, record: ValidationRecord) -> PersistOutcome:
        """Insert-or-update keyed by ``record.email``.

        Creates the owning contact on insert. Returns INSERTED or UPDATED.
        """
        ...

    @abstractmethod
    async def count(self) -> int: ...
