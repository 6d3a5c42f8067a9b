"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)
from sqlalchemy.types import JSON

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CONTACTS TABLE (owning entity of a validation record)
# ============================================================================
contacts_table = Table(
    "contacts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


# ============================================================================
# EMAIL VALIDATIONS TABLE (one live row per normalized input address)
# ============================================================================
email_validations_table = Table(
    "email_validations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "contact_id",
        Integer,
        ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("email", String(254), nullable=False, unique=True),
    Column("um_email", String(254), nullable=False),  # Address after correction
    Column("status", String(32), nullable=False),  # ValidationStatus as string
    Column("sub_status", String(64), nullable=True),
    Column("um_email_status", String(32), nullable=False),
    Column("um_bounce_status", String(32), nullable=False),
    Column("um_check_id", String(17), nullable=False),
    Column("date_last_um_check", DateTime(timezone=True), nullable=False),
    Column("date_last_um_check_epoch", BigInteger, nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

Index("idx_email_validations_contact_id", email_validations_table.c.contact_id)


# ============================================================================
# KNOWN-GOOD CACHE TABLE (SQL backend of the known-good cache)
# ============================================================================
known_good_cache_table = Table(
    "known_good_cache",
    metadata,
    Column("key", String(254), primary_key=True),
    Column("value", JSON, nullable=False),
    Column("expires_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

Index("idx_known_good_cache_expires_at", known_good_cache_table.c.expires_at)
