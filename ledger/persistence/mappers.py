"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from ledger.domain.model import Invite
from ledger.domain.value import (
    EmailAddress,
    IdentityId,
    InviteId,
    InviteKind,
    InviteToken,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps coming back from the driver."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    return Invite(
        id=InviteId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        kind=InviteKind(row["kind"]),
        token=InviteToken(root=row["token"]),
        audience=EmailAddress(root=row["audience"]) if row.get("audience") else None,
        issued_by=IdentityId(row["issued_by"]),
        created_at=_as_utc(row["created_at"]),
        expires_at=_as_utc(row["expires_at"]),
        is_used=row["is_used"],
        used_at=_as_utc(row.get("used_at")),
        redeemed_by=IdentityId(row["redeemed_by"]) if row.get("redeemed_by") else None,
        notes=row.get("notes"),
        email_sent_at=_as_utc(row.get("email_sent_at")),
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dictionary for database insert/update
    """
    return {
        "id": invite.id,
        "kind": invite.kind.value,
        "token": invite.token.root,
        "audience": invite.audience.root if invite.audience else None,
        "issued_by": invite.issued_by,
        "created_at": invite.created_at,
        "expires_at": invite.expires_at,
        "is_used": invite.is_used,
        "used_at": invite.used_at,
        "redeemed_by": invite.redeemed_by,
        "notes": invite.notes,
        "email_sent_at": invite.email_sent_at,
    }
