"""Invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from ledger.domain.model.invite import Invite
from ledger.domain.value import IdentityId, InviteId, InviteKind


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def add(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Args:
            invite: The invite to insert

        Returns:
            The stored invite

        Raises:
            DuplicateTokenError: If another invite already uses this token
        """
        pass

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, kind: InviteKind, token: str) -> Invite | None:
        """Find an invite of the given kind by exact token match.

        Args:
            kind: Code or email invite
            token: The raw token

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def redeem(
        self,
        kind: InviteKind,
        token: str,
        redeemer_id: IdentityId,
        now: datetime,
    ) -> Invite | None:
        """Mark an invite as used if, and only if, it is still valid.

        The check and the update must be a single atomic step: when several
        callers race on the same token exactly one of them gets the invite
        back and the others get None.

        Args:
            kind: Code or email invite
            token: The raw token
            redeemer_id: Identity consuming the invite
            now: Redemption time, also used for the expiry check

        Returns:
            The redeemed invite, or None if missing, used or expired
        """
        pass

    @abstractmethod
    async def count_active_by_issuer(
        self, issuer_id: IdentityId, now: datetime, kind: InviteKind | None = None
    ) -> int:
        """Count unused, unexpired invites issued by an identity.

        Used for quota checking.

        Args:
            issuer_id: The issuer's identity
            now: Reference time for expiry
            kind: Optional kind filter

        Returns:
            Number of active invites
        """
        pass

    @abstractmethod
    async def find_active_by_issuer(
        self,
        issuer_id: IdentityId,
        now: datetime,
        kind: InviteKind | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Invite]:
        """Find unused, unexpired invites issued by an identity, newest first.

        Args:
            issuer_id: The issuer's identity
            now: Reference time for expiry
            kind: Optional kind filter
            limit: Maximum number of results, None for all
            offset: Number of results to skip

        Returns:
            List of active invites
        """
        pass

    @abstractmethod
    async def delete_expired_unused(self, now: datetime) -> int:
        """Delete invites that expired before ``now`` and were never used.

        Redeemed invites are never deleted.

        Args:
            now: Reference time for expiry

        Returns:
            Number of deleted invites
        """
        pass

    @abstractmethod
    async def mark_email_sent(
        self, invite_id: InviteId, sent_at: datetime
    ) -> Invite | None:
        """Record when an email invite was delivered.

        Args:
            invite_id: The invite's unique identifier
            sent_at: Delivery time

        Returns:
            The updated invite, or None if it no longer exists
        """
        pass
