"""Issue email invites use case."""

from urllib.parse import urlencode

import logfire
from pydantic import BaseModel, Field

from ledger.application.usecase.base import BaseUseCase
from ledger.application.usecase.invite.item import InviteItem
from ledger.config import Settings
from ledger.domain.error import DeliveryError, ValidationError
from ledger.domain.model.invite import MAX_NOTES_LENGTH, Invite
from ledger.domain.service import InviteLedger, InviteMailer


class IssueEmailInvitesRequest(BaseModel):
    """Request to issue email invites."""

    issuer_id: str
    emails: list[str] = Field(min_length=1)
    notes: str | None = Field(default=None, max_length=MAX_NOTES_LENGTH)
    expiration_hours: float | None = None


class EmailInviteItem(InviteItem):
    """Email invite item in response."""

    invite_url: str  # Registration link with token and address
    email_sent: bool


class IssueEmailInvitesResponse(BaseModel):
    """Response after issuing email invites."""

    invites: list[EmailInviteItem]
    failed_emails: list[str]  # No invite was issued for these
    remaining_quota: int


def build_invite_link(settings: Settings, invite: Invite) -> str:
    """Build the registration link for an email invite.

    Args:
        settings: Application settings
        invite: Email invite

    Returns:
        ``{frontend_url}{registration_path}?inviteToken=...&email=...``
    """
    query = urlencode({"inviteToken": invite.token.root, "email": str(invite.audience)})
    return (
        f"{settings.api.frontend_url}{settings.invitations.registration_path}?{query}"
    )


class IssueEmailInvitesUseCase(BaseUseCase):
    """Use case for issuing and mailing a batch of email invites."""

    def __init__(
        self,
        invite_ledger: InviteLedger,
        invite_mailer: InviteMailer,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            invite_ledger: Invite ledger domain service
            invite_mailer: Delivers invitation emails
            settings: Application settings
        """
        self.invite_ledger = invite_ledger
        self.invite_mailer = invite_mailer
        self.settings = settings

    async def execute(
        self, request: IssueEmailInvitesRequest
    ) -> IssueEmailInvitesResponse:
        """Issue one email invite per address and mail each of them.

        Addresses that fail validation, or that would exceed the issuer's
        quota, are reported in ``failed_emails``. A failed delivery keeps
        the invite and reports ``email_sent=False``.

        Args:
            request: Issue email invites request

        Returns:
            Response with issued invites, failures and remaining quota

        Raises:
            ValidationError: If the batch is too large or the issuer is invalid
        """
        max_batch = self.settings.invitations.max_batch_size
        if len(request.emails) > max_batch:
            raise ValidationError(f"At most {max_batch} email invites per request")

        with logfire.span(
            "issue_email_invites.execute",
            issuer_id=request.issuer_id,
            invite_count=len(request.emails),
        ):
            items: list[EmailInviteItem] = []
            failed_emails: list[str] = []

            for email in request.emails:
                if self.settings.invitations.enforce_quota:
                    if not await self.invite_ledger.can_issue_more(request.issuer_id):
                        logfire.warn(
                            "Invite quota exceeded",
                            issuer_id=request.issuer_id,
                            email=email,
                        )
                        failed_emails.append(email)
                        continue

                try:
                    invite = await self.invite_ledger.issue_email_invite(
                        email,
                        request.issuer_id,
                        notes=request.notes,
                        expiration_hours=request.expiration_hours,
                    )
                except ValidationError as e:
                    logfire.warn(
                        "Failed to issue email invite", email=email, error=str(e)
                    )
                    failed_emails.append(email)
                    continue

                items.append(await self._deliver(invite))

            remaining = await self.invite_ledger.remaining_quota(request.issuer_id)

            logfire.info(
                "Email invites issued",
                issuer_id=request.issuer_id,
                issued=len(items),
                sent=sum(1 for item in items if item.email_sent),
                failed=len(failed_emails),
            )

            return IssueEmailInvitesResponse(
                invites=items,
                failed_emails=failed_emails,
                remaining_quota=remaining,
            )

    async def _deliver(self, invite: Invite) -> EmailInviteItem:
        """Mail an invite and stamp it when the transport accepted it."""
        link = build_invite_link(self.settings, invite)

        try:
            sent = await self.invite_mailer.send_invite(invite, link)
        except DeliveryError as e:
            logfire.warn(
                "Invite email delivery failed",
                invite_id=str(invite.id),
                recipient=e.recipient,
                error=str(e),
            )
            sent = False

        if sent:
            invite = await self.invite_ledger.record_email_sent(invite.id) or invite

        return EmailInviteItem(
            **InviteItem.from_invite(invite).model_dump(),
            invite_url=link,
            email_sent=sent,
        )
