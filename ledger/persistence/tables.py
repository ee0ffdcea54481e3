"""SQLAlchemy table definitions for the invite ledger.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ENUM, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# INVITES TABLE (codes and email invites share one token namespace)
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "kind",
        ENUM("code", "email", name="invite_kind", create_type=False),
        nullable=False,
    ),
    Column("token", String(255), nullable=False),
    Column("audience", String(255), nullable=True),  # Email invites only
    Column("issued_by", String(255), nullable=False),  # Opaque identity reference
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("is_used", Boolean, nullable=False, server_default="false"),
    Column("used_at", TIMESTAMP(timezone=True), nullable=True),
    Column("redeemed_by", String(255), nullable=True),
    Column("notes", String(500), nullable=True),
    Column("email_sent_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("token", name="uq_invites_token"),
    CheckConstraint(
        "(kind = 'email') = (audience IS NOT NULL)",
        name="ck_invites_audience_matches_kind",
    ),
    CheckConstraint(
        "is_used = (used_at IS NOT NULL)",
        name="ck_invites_used_at_matches_is_used",
    ),
)

# Quota checks and issuer listings
Index(
    "idx_invites_issuer_active",
    invites_table.c.issued_by,
    invites_table.c.is_used,
    invites_table.c.expires_at,
)

# Cleanup only ever touches unused rows
Index(
    "idx_invites_expires_unused",
    invites_table.c.expires_at,
    postgresql_where=~invites_table.c.is_used,
)
