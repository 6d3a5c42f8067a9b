"""Validation request and result models."""

from datetime import datetime
from typing import Any

from pydantic import Field, computed_field, model_validator
from typing_extensions import Self

from unmessy.domain.shared.model.value import ValueObject
from unmessy.domain.validation.model.value import (
    UNCERTAIN_STATUSES,
    BounceStatus,
    EmailChangeStatus,
    ValidationStatus,
)


class ValidationRequest(ValueObject):
    """A single address submitted for validation, with per-call overrides."""

    address: str
    tracking_id: str | None = None
    skip_oracle: bool = False
    timeout: float | None = Field(default=None, gt=0)  # Overall deadline override, seconds


class ValidationStep(ValueObject):
    """One pipeline stage that was attempted."""

    step: str
    passed: bool | None = None
    error: str | None = None
    detail: dict[str, Any] = Field(default_factory=dict)


class ValidationResult(ValueObject):
    """Verdict for one address. Built once per request and never mutated after return."""

    original_address: str
    current_address: str
    format_valid: bool
    status: ValidationStatus
    sub_status: str | None = None
    recheck_needed: bool
    suggested_address: str | None = None
    check_id: str
    checked_at: datetime
    steps: tuple[ValidationStep, ...] = ()
    tracking_id: str | None = None

    @model_validator(mode="after")
    def uncertain_verdicts_need_recheck(self) -> Self:
        if self.status in UNCERTAIN_STATUSES and not self.recheck_needed:
            raise ValueError(f"status {self.status} requires recheck_needed")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def was_corrected(self) -> bool:
        return self.current_address != self.original_address

    @computed_field  # type: ignore[prop-decorator]
    @property
    def checked_at_epoch(self) -> int:
        return int(self.checked_at.timestamp())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def email_change_status(self) -> EmailChangeStatus:
        if not self.format_valid:
            return EmailChangeStatus.UNABLE_TO_CHANGE
        return EmailChangeStatus.CHANGED if self.was_corrected else EmailChangeStatus.UNCHANGED

    @computed_field  # type: ignore[prop-decorator]
    @property
    def bounce_status(self) -> BounceStatus:
        if self.status == ValidationStatus.VALID:
            return BounceStatus.UNLIKELY
        if self.status == ValidationStatus.INVALID:
            return BounceStatus.LIKELY
        return BounceStatus.UNKNOWN

    def evolve(self, **changes: Any) -> "ValidationResult":
        """Copy with changes, re-running validation (model_copy would skip it)."""
        data = self.model_dump(
            exclude={"was_corrected", "checked_at_epoch", "email_change_status", "bounce_status"}
        )
        data.update(changes)
        return type(self).model_validate(data)

    def with_step(self, step: ValidationStep) -> "ValidationResult":
        return self.evolve(steps=(*self.steps, step))

    def step(self, name: str) -> ValidationStep | None:
        """Last recorded step with the given name."""
        for entry in reversed(self.steps):
            if entry.step == name:
                return entry
        return None
