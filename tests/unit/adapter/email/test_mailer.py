"""Unit tests for the invite mailers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from ledger.adapter.email import (
    SUBJECT,
    LoggingInviteMailer,
    MockInviteMailer,
    render_invite_body,
)
from ledger.domain.error import DeliveryError
from ledger.domain.model import Invite
from ledger.domain.value import IdentityId, InviteId, InviteKind, InviteToken

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
LINK = "http://localhost:3000/register?inviteToken=abc&email=bob%40example.com"


@pytest.fixture
def invite() -> Invite:
    return Invite(
        id=InviteId(uuid4()),
        kind=InviteKind.EMAIL,
        token=InviteToken("abc"),
        audience="bob@example.com",
        issued_by=IdentityId("alice"),
        created_at=NOW,
        expires_at=NOW + timedelta(hours=24),
    )


def test_body_contains_escaped_link(invite):
    body = render_invite_body(invite, LINK + "&x=<y>")

    assert "&amp;email=bob%40example.com" in body
    assert "<y>" not in body
    assert "2025-01-02 12:00 UTC" in body


@pytest.mark.asyncio
async def test_logging_mailer_accepts(invite):
    mailer = LoggingInviteMailer(mail_from="invites@example.com")

    assert await mailer.send_invite(invite, LINK) is True


@pytest.mark.asyncio
async def test_mock_mailer_records(invite):
    mailer = MockInviteMailer()

    assert await mailer.send_invite(invite, LINK) is True

    assert len(mailer.sent) == 1
    assert mailer.sent[0].recipient == "bob@example.com"
    assert mailer.sent[0].subject == SUBJECT
    assert mailer.sent[0].link == LINK


@pytest.mark.asyncio
async def test_mock_mailer_failures(invite):
    failing = MockInviteMailer(fail_for={"bob@example.com"})
    rejecting = MockInviteMailer(reject_all=True)

    with pytest.raises(DeliveryError):
        await failing.send_invite(invite, LINK)
    assert await rejecting.send_invite(invite, LINK) is False
    assert failing.sent == [] and rejecting.sent == []
