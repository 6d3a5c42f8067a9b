"""initial_tables

Contacts, email validations and the SQL-backed known-good cache.

Revision ID: 5c1e2a7f90b3
Revises:
Create Date: 2026-10-19 09:12:44.201873

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e2a7f90b3"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # CONTACTS
    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # EMAIL VALIDATIONS
    op.create_table(
        "email_validations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("contact_id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("um_email", sa.String(254), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("sub_status", sa.String(64), nullable=True),
        sa.Column("um_email_status", sa.String(32), nullable=False),
        sa.Column("um_bounce_status", sa.String(32), nullable=False),
        sa.Column("um_check_id", sa.String(17), nullable=False),
        sa.Column("date_last_um_check", sa.DateTime(timezone=True), nullable=False),
        sa.Column("date_last_um_check_epoch", sa.BigInteger(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["contact_id"], ["contacts.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_email_validations_contact_id", "email_validations", ["contact_id"])

    # KNOWN-GOOD CACHE
    op.create_table(
        "known_good_cache",
        sa.Column("key", sa.String(254), nullable=False),
        sa.Column("value", sa.JSON(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )
    op.create_index("idx_known_good_cache_expires_at", "known_good_cache", ["expires_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_known_good_cache_expires_at", table_name="known_good_cache")
    op.drop_table("known_good_cache")
    op.drop_index("idx_email_validations_contact_id", table_name="email_validations")
    op.drop_table("email_validations")
    op.drop_table("contacts")
