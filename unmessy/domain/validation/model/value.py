from enum import StrEnum


class ValidationStatus(StrEnum):
    VALID = "valid"
    INVALID = "invalid"
    UNKNOWN = "unknown"
    CHECK_FAILED = "check_failed"
    CHECK_SKIPPED = "check_skipped"


# Verdicts that are not a high-confidence determination
UNCERTAIN_STATUSES = frozenset(
    {
        ValidationStatus.UNKNOWN,
        ValidationStatus.CHECK_FAILED,
        ValidationStatus.CHECK_SKIPPED,
    }
)


class DomainClass(StrEnum):
    DENYLISTED = "denylisted"
    ALLOWLISTED = "allowlisted"
    UNKNOWN = "unknown"


class EmailChangeStatus(StrEnum):
    CHANGED = "Changed"
    UNCHANGED = "Unchanged"
    UNABLE_TO_CHANGE = "Unable to change"


class BounceStatus(StrEnum):
    UNLIKELY = "Unlikely to bounce"
    LIKELY = "Likely to bounce"
    UNKNOWN = "Unknown"


class PipelineState(StrEnum):
    NORMALIZED = "normalized"
    FORMAT_CHECKED = "format_checked"
    SHORT_CIRCUIT_INVALID = "short_circuit_invalid"
    CACHE_AND_ORACLE_PENDING = "cache_and_oracle_pending"
    RESOLVED = "resolved"
    RETRY_WITH_SUGGESTION = "retry_with_suggestion"
    PERSISTED = "persisted"


class PersistOperation(StrEnum):
    INSERTED = "inserted"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


class SubStatus(StrEnum):
    """Sub-status codes produced by the pipeline itself.

    Oracle-provided sub-statuses are passed through as plain strings.
    """

    BAD_FORMAT = "bad_format"
    INVALID_DOMAIN = "invalid_domain"
    SPAMTRAP = "spamtrap"
    ABUSE = "abuse"
    DO_NOT_MAIL = "do_not_mail"
    VALIDATION_TIMEOUT = "validation_timeout"
    ORACLE_UNAVAILABLE = "oracle_unavailable"
