"""Cleanup invites use case."""

import logfire
from pydantic import BaseModel

from ledger.domain.service import InviteLedger


class CleanupInvitesResponse(BaseModel):
    """Cleanup invites response."""

    removed: int


class CleanupInvitesUseCase:
    """Use case for purging expired invites that were never redeemed.

    Runs from the API and from ``scripts/cleanup_invites.py``.
    """

    def __init__(self, invite_ledger: InviteLedger) -> None:
        """Initialize cleanup invites use case.

        Args:
            invite_ledger: Invite ledger domain service
        """
        self.invite_ledger = invite_ledger

    async def execute(self) -> CleanupInvitesResponse:
        """Delete expired, unused invites."""
        removed = await self.invite_ledger.cleanup()
        logfire.info("Expired invites purged", removed=removed)
        return CleanupInvitesResponse(removed=removed)
