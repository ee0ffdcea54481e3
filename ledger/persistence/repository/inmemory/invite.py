"""In-memory invite repository for testing."""

from datetime import datetime
from typing import Optional

from ledger.domain.error import DuplicateTokenError
from ledger.domain.model.invite import Invite
from ledger.domain.repository.invite import InviteRepository
from ledger.domain.value import IdentityId, InviteId, InviteKind


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing.

    Every method reads and writes the store without awaiting in between, so
    each call is atomic with respect to other tasks on the same event loop.
    """

    def __init__(self) -> None:
        self._invites: dict[InviteId, Invite] = {}

    async def add(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Raises:
            DuplicateTokenError: If the token is already taken
        """
        if any(existing.token == invite.token for existing in self._invites.values()):
            raise DuplicateTokenError(invite.token.masked())
        self._invites[invite.id] = invite
        return invite

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        return self._invites.get(invite_id)

    async def find_by_token(self, kind: InviteKind, token: str) -> Optional[Invite]:
        """Find an invite by kind and exact token."""
        for invite in self._invites.values():
            if invite.kind == kind and invite.token.root == token:
                return invite
        return None

    async def redeem(
        self,
        kind: InviteKind,
        token: str,
        redeemer_id: IdentityId,
        now: datetime,
    ) -> Optional[Invite]:
        """Mark an invite as used if it is still valid."""
        invite = await self.find_by_token(kind, token)
        if invite is None or not invite.is_valid(now):
            return None

        redeemed = invite.model_copy(
            update={"is_used": True, "used_at": now, "redeemed_by": redeemer_id}
        )
        self._invites[invite.id] = redeemed
        return redeemed

    async def count_active_by_issuer(
        self, issuer_id: IdentityId, now: datetime, kind: InviteKind | None = None
    ) -> int:
        """Count unused, unexpired invites issued by an identity."""
        return len(self._active_by_issuer(issuer_id, now, kind))

    async def find_active_by_issuer(
        self,
        issuer_id: IdentityId,
        now: datetime,
        kind: InviteKind | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Invite]:
        """Find unused, unexpired invites issued by an identity, newest first."""
        invites = sorted(
            self._active_by_issuer(issuer_id, now, kind),
            key=lambda i: i.created_at,
            reverse=True,
        )
        end = None if limit is None else offset + limit
        return invites[offset:end]

    async def delete_expired_unused(self, now: datetime) -> int:
        """Delete expired invites that were never used."""
        doomed = [
            invite_id
            for invite_id, invite in self._invites.items()
            if not invite.is_used and invite.is_expired(now)
        ]
        for invite_id in doomed:
            del self._invites[invite_id]
        return len(doomed)

    async def mark_email_sent(
        self, invite_id: InviteId, sent_at: datetime
    ) -> Optional[Invite]:
        """Record when an email invite was delivered."""
        invite = self._invites.get(invite_id)
        if invite is None:
            return None

        updated = invite.model_copy(update={"email_sent_at": sent_at})
        self._invites[invite_id] = updated
        return updated

    def _active_by_issuer(
        self, issuer_id: IdentityId, now: datetime, kind: InviteKind | None
    ) -> list[Invite]:
        return [
            invite
            for invite in self._invites.values()
            if invite.issued_by == issuer_id
            and invite.is_valid(now)
            and (kind is None or invite.kind == kind)
        ]
