import asyncio
import logging

import logfire

from unmessy.domain.shared.service import Service
from unmessy.domain.validation.error import (
    OracleError,
    OracleResponseError,
    OracleTimeout,
)
from unmessy.domain.validation.model import (
    Deadline,
    OracleResult,
    OracleVerdict,
    SubStatus,
    ValidationStatus,
)
from unmessy.domain.validation.port import VerificationOracle

logger = logging.getLogger(__name__)


class OracleClient(Service):
    """Calls the verification oracle with bounded retries.

    Attempt 0 gets ``timeout``; each retry sleeps
    ``backoff_base * 2 ** (attempt - 1)`` and then gets ``retry_timeout``.
    Every wait is clipped to the caller's deadline minus ``reserve``, and a
    retry that no longer fits is not started. All failures come back as an
    OracleResult; nothing is raised.
    """

    oracle: VerificationOracle
    enabled: bool = False
    max_retries: int = 1
    backoff_base: float = 0.2
    timeout: float = 3.0
    retry_timeout: float = 4.0
    reserve: float = 0.05

    async def verify(
        self, address: str, deadline: Deadline, *, skip: bool = False
    ) -> OracleResult:
        if skip or not self.enabled:
            return OracleResult(status=ValidationStatus.CHECK_SKIPPED)

        attempts = 0
        last_error: OracleError | None = None

        for attempt in range(self.max_retries + 1):
            if attempt == 0:
                attempt_timeout = self.timeout
            else:
                backoff = self.backoff_base * 2 ** (attempt - 1)
                if deadline.remaining() - self.reserve <= backoff:
                    logger.info("Oracle retry %d skipped: deadline too close", attempt)
                    break
                await asyncio.sleep(backoff)
                attempt_timeout = self.retry_timeout

            budget = deadline.budget(attempt_timeout, self.reserve)
            if budget <= 0:
                break

            attempts += 1
            try:
                verdict = await self._attempt(address, budget, attempt)
            except OracleError as e:
                last_error = e
                logger.warning(
                    "Oracle attempt %d failed (%s): %s", attempt, e.code, e.message
                )
                if not e.transient:
                    break
                continue

            return OracleResult(
                status=verdict.status,
                sub_status=verdict.sub_status,
                suggested_address=verdict.suggested_address,
                attempts=attempts,
            )

        error = last_error.message if last_error else "no time left for oracle call"
        return OracleResult(
            status=ValidationStatus.CHECK_FAILED,
            sub_status=SubStatus.ORACLE_UNAVAILABLE,
            attempts=attempts,
            error=error,
        )

    async def _attempt(self, address: str, budget: float, attempt: int) -> OracleVerdict:
        with logfire.span("oracle attempt {attempt}", attempt=attempt, budget=budget):
            try:
                return await asyncio.wait_for(
                    self.oracle.verify(address, timeout=budget), timeout=budget
                )
            except TimeoutError as e:
                raise OracleTimeout(f"Oracle timed out after {budget:.2f}s") from e
            except OracleError:
                raise
            except Exception as e:
                raise OracleResponseError(f"Oracle call failed: {e}") from e
