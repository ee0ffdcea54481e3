"""Issue invite code use case."""

import logfire
from pydantic import BaseModel, Field

from ledger.application.usecase.base import BaseUseCase
from ledger.application.usecase.invite.item import InviteItem
from ledger.config import Settings
from ledger.domain.model.invite import MAX_NOTES_LENGTH
from ledger.domain.service import InviteLedger


class IssueCodeRequest(BaseModel):
    """Request to issue an invite code."""

    issuer_id: str
    notes: str | None = Field(default=None, max_length=MAX_NOTES_LENGTH)
    expiration_hours: float | None = None


class IssueCodeResponse(BaseModel):
    """Response after issuing an invite code."""

    issued: bool
    invite: InviteItem | None = None
    remaining_quota: int
    message: str | None = None


class IssueCodeUseCase(BaseUseCase):
    """Use case for issuing a single invite code."""

    def __init__(self, invite_ledger: InviteLedger, settings: Settings) -> None:
        """Initialize use case.

        Args:
            invite_ledger: Invite ledger domain service
            settings: Application settings
        """
        self.invite_ledger = invite_ledger
        self.settings = settings

    async def execute(self, request: IssueCodeRequest) -> IssueCodeResponse:
        """Issue an invite code if the issuer has quota left.

        Args:
            request: Issue code request

        Returns:
            Response with the new code, or issued=False when over quota

        Raises:
            ValidationError: If the request violates invite invariants
            TokenGenerationError: If no unique code could be generated
        """
        with logfire.span("issue_code.execute", issuer_id=request.issuer_id):
            if self.settings.invitations.enforce_quota:
                if not await self.invite_ledger.can_issue_more(request.issuer_id):
                    logfire.warn(
                        "Invite quota exceeded",
                        issuer_id=request.issuer_id,
                        max_active=self.settings.invitations.max_active_per_issuer,
                    )
                    return IssueCodeResponse(
                        issued=False,
                        remaining_quota=0,
                        message="Invite quota exceeded",
                    )

            invite = await self.invite_ledger.issue_code(
                request.issuer_id,
                notes=request.notes,
                expiration_hours=request.expiration_hours,
            )
            remaining = await self.invite_ledger.remaining_quota(request.issuer_id)

            logfire.info(
                "Invite code issued",
                invite_id=str(invite.id),
                issuer_id=request.issuer_id,
                token=invite.token.masked(),
                expires_at=invite.expires_at,
            )

            return IssueCodeResponse(
                issued=True,
                invite=InviteItem.from_invite(invite),
                remaining_quota=remaining,
            )
