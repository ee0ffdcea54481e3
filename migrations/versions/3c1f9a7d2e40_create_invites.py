"""create_invites

Create the invites table shared by invite codes and email invites.

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2025-08-06 01:06:50.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM type (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invite_kind AS ENUM ('code', 'email');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.create_table(
        "invites",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "kind",
            postgresql.ENUM("code", "email", name="invite_kind", create_type=False),
            nullable=False,
        ),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("audience", sa.String(255), nullable=True),
        sa.Column("issued_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "is_used", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column("used_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("redeemed_by", sa.String(255), nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("email_sent_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.UniqueConstraint("token", name="uq_invites_token"),
        sa.CheckConstraint(
            "(kind = 'email') = (audience IS NOT NULL)",
            name="ck_invites_audience_matches_kind",
        ),
        sa.CheckConstraint(
            "is_used = (used_at IS NOT NULL)",
            name="ck_invites_used_at_matches_is_used",
        ),
    )

    # Quota checks and issuer listings
    op.create_index(
        "idx_invites_issuer_active",
        "invites",
        ["issued_by", "is_used", "expires_at"],
    )

    # Cleanup only ever touches unused rows
    op.create_index(
        "idx_invites_expires_unused",
        "invites",
        ["expires_at"],
        postgresql_where=sa.text("NOT is_used"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_invites_expires_unused", table_name="invites")
    op.drop_index("idx_invites_issuer_active", table_name="invites")
    op.drop_table("invites")
    op.execute("DROP TYPE IF EXISTS invite_kind")
