"""Validate invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from ledger.application.usecase.invite.item import INVALID_INVITE_MESSAGE
from ledger.domain.model.invite import Invite
from ledger.domain.service import InviteLedger
from ledger.domain.value import InviteKind, mask_token


class ValidateInviteRequest(BaseModel):
    """Validate invite request."""

    token: str
    kind: InviteKind | None = None  # Try both kinds when omitted


class ValidateInviteResponse(BaseModel):
    """Validate invite response."""

    valid: bool
    kind: InviteKind | None = None
    audience: str | None = None
    expires_at: datetime | None = None
    message: str | None = None


class ValidateInviteUseCase:
    """Use case for validating an invite token.

    This allows the frontend to check an invite before showing the
    registration form. Unknown, used and expired invites all produce the
    same response.
    """

    def __init__(self, invite_ledger: InviteLedger) -> None:
        """Initialize validate invite use case.

        Args:
            invite_ledger: Invite ledger domain service
        """
        self.invite_ledger = invite_ledger

    async def execute(self, request: ValidateInviteRequest) -> ValidateInviteResponse:
        """Validate an invite token.

        Args:
            request: Validation request with token

        Returns:
            Validation response with invite details or the generic error
        """
        token = mask_token(request.token)
        with logfire.span("validate_invite.execute", token=token):
            invite = await self._lookup(request)

            if invite is None:
                logfire.info("Invite rejected", token=token)
                return ValidateInviteResponse(
                    valid=False, message=INVALID_INVITE_MESSAGE
                )

            logfire.info("Valid invite found", token=token, kind=invite.kind.value)
            return ValidateInviteResponse(
                valid=True,
                kind=invite.kind,
                audience=str(invite.audience) if invite.audience else None,
                expires_at=invite.expires_at,
                message="Valid invite",
            )

    async def _lookup(self, request: ValidateInviteRequest) -> Invite | None:
        if request.kind == InviteKind.CODE:
            return await self.invite_ledger.validate_code(request.token)
        if request.kind == InviteKind.EMAIL:
            return await self.invite_ledger.validate_email_invite(request.token)

        # Tokens are unique across kinds, so at most one lookup can match
        invite = await self.invite_ledger.validate_code(request.token)
        if invite is None:
            invite = await self.invite_ledger.validate_email_invite(request.token)
        return invite
