"""Get active invites use case."""

from pydantic import BaseModel, Field

from ledger.application.usecase.invite.item import InviteItem
from ledger.domain.service import InviteLedger
from ledger.domain.value import InviteKind


class GetActiveInvitesRequest(BaseModel):
    """Get active invites request."""

    issuer_id: str  # Identity from auth
    kind: InviteKind | None = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class GetActiveInvitesResponse(BaseModel):
    """Get active invites response."""

    invites: list[InviteItem]
    total: int  # All active invites of the requested kind, not just this page
    remaining_quota: int


class GetActiveInvitesUseCase:
    """Use case for listing an issuer's outstanding invites."""

    def __init__(self, invite_ledger: InviteLedger) -> None:
        """Initialize get active invites use case.

        Args:
            invite_ledger: Invite ledger domain service
        """
        self.invite_ledger = invite_ledger

    async def execute(
        self, request: GetActiveInvitesRequest
    ) -> GetActiveInvitesResponse:
        """Get active invites for an issuer, newest first.

        Args:
            request: Request with issuer, optional kind and paging

        Returns:
            Page of invites with total and remaining quota
        """
        invites = await self.invite_ledger.list_active(
            request.issuer_id,
            kind=request.kind,
            limit=request.limit,
            offset=request.offset,
        )
        total = await self.invite_ledger.count_active(request.issuer_id, request.kind)
        remaining = await self.invite_ledger.remaining_quota(request.issuer_id)

        return GetActiveInvitesResponse(
            invites=[InviteItem.from_invite(invite) for invite in invites],
            total=total,
            remaining_quota=remaining,
        )
