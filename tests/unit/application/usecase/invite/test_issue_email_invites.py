"""Unit tests for IssueEmailInvitesUseCase."""

from urllib.parse import parse_qs, urlsplit
from uuid import UUID

import pytest

from ledger.application.usecase.invite import (
    IssueEmailInvitesRequest,
    IssueEmailInvitesUseCase,
)
from ledger.domain.error import ValidationError
from ledger.domain.repository import InviteRepository
from ledger.domain.service import InviteLedger, InviteMailer
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestIssueEmailInvites:
    @pytest.mark.asyncio
    async def test_issues_and_mails(self, unit_env):
        # Arrange
        use_case = await unit_env.get(IssueEmailInvitesUseCase)
        mailer = await unit_env.get(InviteMailer)
        repo = await unit_env.get(InviteRepository)

        # Act
        response = await use_case.execute(
            IssueEmailInvitesRequest(
                issuer_id="alice", emails=["Bob@Example.com", "carol@example.com"]
            )
        )

        # Assert
        assert [item.audience for item in response.invites] == [
            "bob@example.com",
            "carol@example.com",
        ]
        assert response.failed_emails == []
        assert response.remaining_quota == 8
        assert [m.recipient for m in mailer.sent] == [
            "bob@example.com",
            "carol@example.com",
        ]

        item = response.invites[0]
        assert item.email_sent is True
        assert item.email_sent_at is not None
        stored = await repo.find_by_id(UUID(item.invite_id))
        assert stored.email_sent_at == item.email_sent_at

    @pytest.mark.asyncio
    async def test_link_format(self, unit_env):
        use_case = await unit_env.get(IssueEmailInvitesUseCase)

        response = await use_case.execute(
            IssueEmailInvitesRequest(issuer_id="alice", emails=["bob@example.com"])
        )

        item = response.invites[0]
        url = urlsplit(item.invite_url)
        query = parse_qs(url.query)
        assert f"{url.scheme}://{url.netloc}" == "http://localhost:3000"
        assert url.path == "/register"
        assert query["inviteToken"] == [item.token]
        assert query["email"] == ["bob@example.com"]

    @pytest.mark.asyncio
    async def test_invalid_addresses_are_reported(self, unit_env):
        use_case = await unit_env.get(IssueEmailInvitesUseCase)

        response = await use_case.execute(
            IssueEmailInvitesRequest(
                issuer_id="alice", emails=["nope", "bob@example.com"]
            )
        )

        assert response.failed_emails == ["nope"]
        assert len(response.invites) == 1

    @pytest.mark.asyncio
    async def test_quota_stops_the_batch(self, unit_env):
        use_case = await unit_env.get(IssueEmailInvitesUseCase)
        ledger = await unit_env.get(InviteLedger)
        for _ in range(9):
            await ledger.issue_code("alice")

        response = await use_case.execute(
            IssueEmailInvitesRequest(
                issuer_id="alice", emails=["bob@example.com", "carol@example.com"]
            )
        )

        assert len(response.invites) == 1
        assert response.failed_emails == ["carol@example.com"]
        assert response.remaining_quota == 0

    @pytest.mark.asyncio
    async def test_delivery_failure_keeps_invite(self, unit_env):
        use_case = await unit_env.get(IssueEmailInvitesUseCase)
        mailer = await unit_env.get(InviteMailer)
        mailer.fail_for.add("bob@example.com")

        response = await use_case.execute(
            IssueEmailInvitesRequest(issuer_id="alice", emails=["bob@example.com"])
        )

        item = response.invites[0]
        assert item.email_sent is False
        assert item.email_sent_at is None
        assert response.failed_emails == []

    @pytest.mark.asyncio
    async def test_batch_limit(self, unit_env):
        use_case = await unit_env.get(IssueEmailInvitesUseCase)
        emails = [f"user{i}@example.com" for i in range(11)]

        with pytest.raises(ValidationError):
            await use_case.execute(
                IssueEmailInvitesRequest(issuer_id="alice", emails=emails)
            )
