"""Validation record mapper - converts between domain and persistence."""

from datetime import UTC, datetime
from typing import Any

from unmessy.domain.validation.model import ValidationRecord


def _aware(value: datetime | str) -> datetime:
    # SQLite hands back naive datetimes (or strings) even for timezone=True
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def row_to_validation_record(row: dict[str, Any]) -> ValidationRecord:
    """Convert database row to ValidationRecord."""
    return ValidationRecord(
        email=row["email"],
        um_email=row["um_email"],
        status=row["status"],
        sub_status=row.get("sub_status"),
        um_email_status=row["um_email_status"],
        um_bounce_status=row["um_bounce_status"],
        um_check_id=row["um_check_id"],
        checked_at=_aware(row["date_last_um_check"]),
    )


def validation_record_to_dict(record: ValidationRecord) -> dict[str, Any]:
    """Convert ValidationRecord to the mutable columns of an email_validations row."""
    return {
        "um_email": record.um_email,
        "status": str(record.status),
        "sub_status": record.sub_status,
        "um_email_status": str(record.um_email_status),
        "um_bounce_status": str(record.um_bounce_status),
        "um_check_id": record.um_check_id,
        "date_last_um_check": record.checked_at,
        "date_last_um_check_epoch": int(record.checked_at.timestamp()),
        "updated_at": datetime.now(UTC),
    }
