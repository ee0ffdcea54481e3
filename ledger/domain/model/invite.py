"""Invite entity.

Invites gate registration. An invite is either a short code that a person
passes on by hand, or a long token mailed to one specific address. Both share
the same life cycle:

    active -> redeemed   (permanent, kept for audit)
    active -> expired    (still stored until cleanup)
    expired -> purged    (only when never redeemed)
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ledger.domain.model.common import DomainModel
from ledger.domain.value import (
    EmailAddress,
    IdentityId,
    InviteId,
    InviteKind,
    InviteToken,
)

MAX_NOTES_LENGTH = 500


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - Tokens are unique across both kinds
    - Email invites always carry an audience, codes never do
    - is_used flips to True exactly once, together with used_at/redeemed_by
    - Expiry is evaluated against the current time, never stored as a flag
    """

    id: InviteId
    kind: InviteKind
    token: InviteToken
    audience: Optional[EmailAddress] = None  # Email invites only
    issued_by: IdentityId
    created_at: datetime
    expires_at: datetime
    is_used: bool = False
    used_at: Optional[datetime] = None
    redeemed_by: Optional[IdentityId] = None
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    email_sent_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_consistency(self) -> "Invite":
        """Reject records whose fields contradict each other."""
        if self.kind == InviteKind.EMAIL and self.audience is None:
            raise ValueError("Email invites require an audience")
        if self.kind == InviteKind.CODE and self.audience is not None:
            raise ValueError("Invite codes cannot have an audience")
        if self.is_used != (self.used_at is not None):
            raise ValueError("used_at must be set exactly when is_used is True")
        return self

    def is_expired(self, now: datetime) -> bool:
        """Whether the invite is past its expiry at ``now``."""
        return now > self.expires_at

    def is_valid(self, now: datetime) -> bool:
        """Whether the invite can still be redeemed at ``now``."""
        return not self.is_used and not self.is_expired(now)
