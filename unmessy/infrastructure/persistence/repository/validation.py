import logging
from datetime import UTC, datetime

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from unmessy.domain.validation.model import (
    PersistOperation,
    PersistOutcome,
    ValidationRecord,
)
from unmessy.domain.validation.port import ValidationRecordRepository
from unmessy.infrastructure.persistence.mappers.validation import (
    row_to_validation_record,
    validation_record_to_dict,
)
from unmessy.infrastructure.persistence.tables import (
    contacts_table,
    email_validations_table,
)

logger = logging.getLogger(__name__)


class SqlValidationRecordRepository(ValidationRecordRepository):
    """SQLAlchemy implementation of ValidationRecordRepository.

    Each upsert runs in its own transaction and is committed before it
    returns, so a caller that awaited it knows the row is stored.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, email: str) -> ValidationRecord | None:
        stmt = select(email_validations_table).where(email_validations_table.c.email == email)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_validation_record(dict(row)) if row else None

    async def upsert(self, record: ValidationRecord) -> PersistOutcome:
        try:
            return await self._upsert(record)
        except IntegrityError:
            # A concurrent writer inserted the same address first; the retry updates it
            logger.info("Unique conflict on insert, retrying as update")
            return await self._upsert(record)

    async def count(self) -> int:
        stmt = select(func.count()).select_from(email_validations_table)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def _upsert(self, record: ValidationRecord) -> PersistOutcome:
        values = validation_record_to_dict(record)

        async with self._session_factory() as session, session.begin():
            stmt = select(
                email_validations_table.c.id, email_validations_table.c.contact_id
            ).where(email_validations_table.c.email == record.email)
            existing = (await session.execute(stmt)).first()

            if existing:
                await session.execute(
                    update(email_validations_table)
                    .where(email_validations_table.c.id == existing.id)
                    .values(**values)
                )
                return PersistOutcome(
                    operation=PersistOperation.UPDATED,
                    record_id=existing.id,
                    contact_id=existing.contact_id,
                )

            contact = await session.execute(
                insert(contacts_table).values(created_at=datetime.now(UTC))
            )
            contact_id = contact.inserted_primary_key[0]
            inserted = await session.execute(
                insert(email_validations_table).values(
                    email=record.email, contact_id=contact_id, **values
                )
            )
            return PersistOutcome(
                operation=PersistOperation.INSERTED,
                record_id=inserted.inserted_primary_key[0],
                contact_id=contact_id,
            )
