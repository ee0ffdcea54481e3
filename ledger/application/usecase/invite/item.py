"""Invite representation shared by the invite use cases."""

from datetime import datetime

from pydantic import BaseModel

from ledger.domain.model.invite import Invite
from ledger.domain.value import InviteKind

# The one message callers see for every failed validation or redemption
INVALID_INVITE_MESSAGE = "Invalid or expired invite"


class InviteItem(BaseModel):
    """Invite item in responses."""

    invite_id: str
    kind: InviteKind
    token: str
    audience: str | None = None
    notes: str | None = None
    created_at: datetime
    expires_at: datetime
    email_sent_at: datetime | None = None

    @classmethod
    def from_invite(cls, invite: Invite) -> "InviteItem":
        """Build a response item from an invite."""
        return cls(
            invite_id=str(invite.id),
            kind=invite.kind,
            token=invite.token.root,
            audience=str(invite.audience) if invite.audience else None,
            notes=invite.notes,
            created_at=invite.created_at,
            expires_at=invite.expires_at,
            email_sent_at=invite.email_sent_at,
        )
