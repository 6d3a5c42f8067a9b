"""Verification oracle models."""

from typing import Any

from pydantic import Field

from unmessy.domain.shared.model.value import ValueObject
from unmessy.domain.validation.model.value import UNCERTAIN_STATUSES, ValidationStatus


class OracleVerdict(ValueObject):
    """One successful oracle response, already mapped to our status taxonomy."""

    status: ValidationStatus
    sub_status: str | None = None
    suggested_address: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)


class OracleResult(ValueObject):
    """What the oracle client hands back to the orchestrator; failures included."""

    status: ValidationStatus
    sub_status: str | None = None
    suggested_address: str | None = None
    attempts: int = 0
    error: str | None = None

    @property
    def recheck_needed(self) -> bool:
        return self.status in UNCERTAIN_STATUSES

    @property
    def definitive(self) -> bool:
        return self.status in (ValidationStatus.VALID, ValidationStatus.INVALID)
