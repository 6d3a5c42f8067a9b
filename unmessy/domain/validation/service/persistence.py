import asyncio
import logging

import logfire

from unmessy.domain.shared.service import Service
from unmessy.domain.validation.error import PersistenceFailure
from unmessy.domain.validation.model import (
    Deadline,
    PersistOperation,
    PersistOutcome,
    ValidationRecord,
    ValidationResult,
    ValidationStatus,
)
from unmessy.domain.validation.port import ValidationRecordRepository

logger = logging.getLogger(__name__)


class PersistenceWriter(Service):
    """Idempotent upsert of confirmed-valid verdicts.

    Only ``valid`` results that need no recheck are written. The row is keyed
    by the normalized input address, so replays update the existing record
    instead of adding one. Failures are returned as a FAILED outcome, never
    raised.
    """

    repository: ValidationRecordRepository
    timeout: float = 2.0

    async def upsert(
        self, address: str, result: ValidationResult, deadline: Deadline | None = None
    ) -> PersistOutcome:
        if result.status != ValidationStatus.VALID or result.recheck_needed:
            return PersistOutcome(operation=PersistOperation.SKIPPED)

        timeout = self.timeout if deadline is None else deadline.budget(self.timeout)
        if timeout <= 0:
            logger.warning("No time left to persist validation %s", result.check_id)
            return PersistOutcome(
                operation=PersistOperation.FAILED, error="no time left for persistence"
            )

        record = ValidationRecord(
            email=address,
            um_email=result.current_address,
            status=result.status,
            sub_status=result.sub_status,
            um_email_status=result.email_change_status,
            um_bounce_status=result.bounce_status,
            um_check_id=result.check_id,
            checked_at=result.checked_at,
        )

        with logfire.span("persist validation record"):
            try:
                outcome = await asyncio.wait_for(self.repository.upsert(record), timeout=timeout)
            except TimeoutError:
                failure = PersistenceFailure(f"Upsert timed out after {timeout:.2f}s")
            except Exception as e:
                failure = PersistenceFailure(f"Upsert failed: {e}")
            else:
                logger.debug("Persisted %s as %s", address, outcome.operation)
                return outcome

        logger.error("Could not persist validation %s: %s", result.check_id, failure.message)
        return PersistOutcome(operation=PersistOperation.FAILED, error=failure.message)
