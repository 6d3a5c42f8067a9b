from unmessy.domain.validation.model.address import CheckIdParts, NormalizedAddress
from unmessy.domain.validation.model.deadline import Deadline
from unmessy.domain.validation.model.oracle import OracleResult, OracleVerdict
from unmessy.domain.validation.model.record import (
    CacheLookup,
    KnownGoodEntry,
    PersistOutcome,
    ValidationRecord,
)
from unmessy.domain.validation.model.result import (
    ValidationRequest,
    ValidationResult,
    ValidationStep,
)
from unmessy.domain.validation.model.value import (
    UNCERTAIN_STATUSES,
    BounceStatus,
    DomainClass,
    EmailChangeStatus,
    PersistOperation,
    PipelineState,
    SubStatus,
    ValidationStatus,
)

__all__ = [
    "UNCERTAIN_STATUSES",
    "BounceStatus",
    "CacheLookup",
    "CheckIdParts",
    "Deadline",
    "DomainClass",
    "EmailChangeStatus",
    "KnownGoodEntry",
    "NormalizedAddress",
    "OracleResult",
    "OracleVerdict",
    "PersistOperation",
    "PersistOutcome",
    "PipelineState",
    "SubStatus",
    "ValidationRecord",
    "ValidationRequest",
    "ValidationResult",
    "ValidationStatus",
    "ValidationStep",
]
