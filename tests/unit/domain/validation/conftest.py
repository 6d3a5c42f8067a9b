"""In-memory fakes for the validation ports, plus a pipeline factory."""

import asyncio
from typing import Any

import pytest

from unmessy.domain.validation.model import (
    OracleVerdict,
    PersistOperation,
    PersistOutcome,
    ValidationRecord,
    ValidationStatus,
)
from unmessy.domain.validation.service import (
    CheckIdGenerator,
    DomainClassifier,
    FormatChecker,
    KnownGoodCacheGateway,
    Normalizer,
    OracleClient,
    PersistenceWriter,
    ValidationOrchestrator,
)


class FakeOracle:
    """Answers from a per-address script; unscripted addresses come back valid.

    A script entry is a verdict or an exception instance. A list is consumed
    one attempt at a time, with its last element repeating.
    """

    def __init__(
        self,
        script: dict[str, Any] | None = None,
        *,
        delay: float = 0.0,
    ) -> None:
        self.script = {k: v if isinstance(v, list) else [v] for k, v in (script or {}).items()}
        self.delay = delay
        self.calls: list[str] = []
        self.timeouts: list[float] = []

    def answer(self, address: str, *entries: Any) -> None:
        self.script[address] = list(entries)

    async def verify(self, address: str, *, timeout: float) -> OracleVerdict:
        self.calls.append(address)
        self.timeouts.append(timeout)
        if self.delay:
            await asyncio.sleep(self.delay)
        entries = self.script.get(address)
        if not entries:
            return OracleVerdict(status=ValidationStatus.VALID)
        entry = entries.pop(0) if len(entries) > 1 else entries[0]
        if isinstance(entry, Exception):
            raise entry
        return entry


class FakeCache:
    def __init__(
        self, *, delay: float = 0.0, set_delay: float = 0.0, error: Exception | None = None
    ) -> None:
        self.store: dict[str, dict[str, Any]] = {}
        self.delay = delay
        self.set_delay = set_delay
        self.error = error
        self.gets: list[str] = []
        self.sets: list[tuple[str, int]] = []

    async def get(self, key: str) -> dict[str, Any] | None:
        self.gets.append(key)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.store.get(key)

    async def set(self, key: str, value: dict[str, Any], ttl: int) -> None:
        if self.set_delay:
            await asyncio.sleep(self.set_delay)
        if self.error:
            raise self.error
        self.sets.append((key, ttl))
        self.store[key] = value


class FakeRepository:
    def __init__(self, *, error: Exception | None = None, delay: float = 0.0) -> None:
        self.records: dict[str, ValidationRecord] = {}
        self.error = error
        self.delay = delay
        self.upserts: list[ValidationRecord] = []

    async def get(self, email: str) -> ValidationRecord | None:
        return self.records.get(email)

    async def upsert(self, record: ValidationRecord) -> PersistOutcome:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        self.upserts.append(record)
        existed = record.email in self.records
        self.records[record.email] = record
        return PersistOutcome(
            operation=PersistOperation.UPDATED if existed else PersistOperation.INSERTED,
            record_id=list(self.records).index(record.email) + 1,
        )

    async def count(self) -> int:
        return len(self.records)


@pytest.fixture
def oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def make_orchestrator(oracle, cache, repository):
    def _make(
        *,
        oracle: Any = oracle,
        cache: Any = cache,
        repository: Any = repository,
        oracle_enabled: bool = True,
        max_retries: int = 1,
        timeout: float = 2.0,
        oracle_timeout: float = 0.5,
        oracle_retry_timeout: float = 0.6,
        cache_timeout: float = 0.5,
        persistence_timeout: float = 0.5,
        backoff_base: float = 0.0,
    ) -> ValidationOrchestrator:
        return ValidationOrchestrator(
            normalizer=Normalizer(),
            format_checker=FormatChecker(),
            classifier=DomainClassifier(),
            cache=KnownGoodCacheGateway(cache=cache, timeout=cache_timeout),
            oracle=OracleClient(
                oracle=oracle,
                enabled=oracle_enabled,
                max_retries=max_retries,
                backoff_base=backoff_base,
                timeout=oracle_timeout,
                retry_timeout=oracle_retry_timeout,
                reserve=0.01,
            ),
            persistence=PersistenceWriter(repository=repository, timeout=persistence_timeout),
            check_ids=CheckIdGenerator(client_id="00042"),
            timeout=timeout,
        )

    return _make
