"""Redeem invite use case."""

import logfire
from pydantic import BaseModel

from ledger.application.usecase.invite.item import INVALID_INVITE_MESSAGE
from ledger.domain.service import InviteLedger
from ledger.domain.value import InviteKind, mask_token


class RedeemInviteRequest(BaseModel):
    """Redeem invite request."""

    token: str
    redeemer_id: str  # Identity from auth
    kind: InviteKind | None = None  # Try both kinds when omitted


class RedeemInviteResponse(BaseModel):
    """Redeem invite response."""

    redeemed: bool
    kind: InviteKind | None = None
    message: str | None = None


class RedeemInviteUseCase:
    """Use case for consuming an invite during registration."""

    def __init__(self, invite_ledger: InviteLedger) -> None:
        """Initialize redeem invite use case.

        Args:
            invite_ledger: Invite ledger domain service
        """
        self.invite_ledger = invite_ledger

    async def execute(self, request: RedeemInviteRequest) -> RedeemInviteResponse:
        """Redeem an invite for the requesting identity.

        Args:
            request: Redemption request

        Returns:
            Response telling whether this call consumed the invite

        Raises:
            ValidationError: If redeemer_id is empty
        """
        token = mask_token(request.token)
        with logfire.span(
            "redeem_invite.execute", token=token, redeemer_id=request.redeemer_id
        ):
            kind = await self._redeem(request)

            if kind is None:
                logfire.warn(
                    "Invite redemption rejected",
                    token=token,
                    redeemer_id=request.redeemer_id,
                )
                return RedeemInviteResponse(
                    redeemed=False, message=INVALID_INVITE_MESSAGE
                )

            logfire.info(
                "Invite redeemed",
                token=token,
                kind=kind.value,
                redeemer_id=request.redeemer_id,
            )
            return RedeemInviteResponse(redeemed=True, kind=kind)

    async def _redeem(self, request: RedeemInviteRequest) -> InviteKind | None:
        kinds = [request.kind] if request.kind else [InviteKind.CODE, InviteKind.EMAIL]

        for kind in kinds:
            if kind == InviteKind.CODE:
                redeemed = await self.invite_ledger.redeem_code(
                    request.token, request.redeemer_id
                )
            else:
                redeemed = await self.invite_ledger.redeem_email_invite(
                    request.token, request.redeemer_id
                )
            if redeemed:
                return kind
        return None
