"""Invite mailer adapters."""

from dataclasses import dataclass, field

import logfire

from ledger.domain.error import DeliveryError
from ledger.domain.model.invite import Invite
from ledger.domain.service import InviteMailer

from .template import SUBJECT, render_invite_body


@dataclass(frozen=True)
class SentInvite:
    """A message accepted by MockInviteMailer."""

    recipient: str
    subject: str
    link: str
    body: str


class LoggingInviteMailer(InviteMailer):
    """Renders invitation emails and logs them instead of sending.

    Stands in until the host wires a real transport; every message is
    reported as accepted.
    """

    def __init__(self, mail_from: str):
        """Initialize mailer.

        Args:
            mail_from: Sender address shown on the message
        """
        self.mail_from = mail_from

    async def send_invite(self, invite: Invite, link: str) -> bool:
        """Render the message and log it."""
        if invite.audience is None:
            raise DeliveryError("<none>", "invite has no audience")

        body = render_invite_body(invite, link)
        logfire.info(
            "Invitation email rendered (no transport configured)",
            mail_from=self.mail_from,
            recipient=str(invite.audience),
            subject=SUBJECT,
            invite_id=str(invite.id),
            body_length=len(body),
        )
        return True


@dataclass
class MockInviteMailer(InviteMailer):
    """Mock invite mailer for development and testing.

    Records every accepted message. Set ``fail_for`` to make delivery to
    particular recipients raise DeliveryError, or ``reject_all`` to report
    every message as not accepted.
    """

    fail_for: set[str] = field(default_factory=set)
    reject_all: bool = False
    sent: list[SentInvite] = field(default_factory=list)

    async def send_invite(self, invite: Invite, link: str) -> bool:
        """Record the message."""
        recipient = str(invite.audience)
        if recipient in self.fail_for:
            raise DeliveryError(recipient, "mock transport failure")
        if self.reject_all:
            return False

        self.sent.append(
            SentInvite(
                recipient=recipient,
                subject=SUBJECT,
                link=link,
                body=render_invite_body(invite, link),
            )
        )
        return True
