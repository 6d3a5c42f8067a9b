from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from unmessy.config import Config
from unmessy.domain.validation.port import ValidationRecordRepository
from unmessy.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from unmessy.infrastructure.persistence.repository.validation import (
    SqlValidationRecordRepository,
)
from unmessy.util.di.base import Provider
from unmessy.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # The repository commits per upsert, so it is safe to share across requests
    @provide(scope=Scope.APP, provides=ValidationRecordRepository)
    def get_validation_repo(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> SqlValidationRecordRepository:
        return SqlValidationRecordRepository(session_factory)
