"""Models exchanged with the known-good cache and the relational store."""

from datetime import datetime

from unmessy.domain.shared.model.value import ValueObject
from unmessy.domain.validation.model.value import (
    BounceStatus,
    EmailChangeStatus,
    PersistOperation,
    ValidationStatus,
)


class KnownGoodEntry(ValueObject):
    """A previously confirmed verdict stored in the known-good cache."""

    address: str
    status: ValidationStatus
    sub_status: str | None = None
    check_id: str
    checked_at: datetime


class CacheLookup(ValueObject):
    found: bool
    fresh: bool = False
    entry: KnownGoodEntry | None = None
    error: str | None = None


class ValidationRecord(ValueObject):
    """Row-shaped view of a persisted verdict, keyed by the normalized input address."""

    email: str
    um_email: str
    status: ValidationStatus
    sub_status: str | None = None
    um_email_status: EmailChangeStatus
    um_bounce_status: BounceStatus
    um_check_id: str
    checked_at: datetime


class PersistOutcome(ValueObject):
    operation: PersistOperation
    record_id: int | None = None
    contact_id: int | None = None
    error: str | None = None
