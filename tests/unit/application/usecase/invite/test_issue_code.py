"""Unit tests for IssueCodeUseCase."""

import pytest

from ledger.application.usecase.invite import IssueCodeRequest, IssueCodeUseCase
from ledger.config import InvitationSettings, Settings
from ledger.domain.error import ValidationError
from ledger.domain.service import FixedClock, InviteLedger
from ledger.persistence.repository.inmemory import InMemoryInviteRepository
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestIssueCode:
    @pytest.mark.asyncio
    async def test_issues_code(self, unit_env):
        # Arrange
        use_case = await unit_env.get(IssueCodeUseCase)

        # Act
        response = await use_case.execute(
            IssueCodeRequest(issuer_id="alice", notes="conference")
        )

        # Assert
        assert response.issued is True
        assert response.invite.kind == "code"
        assert len(response.invite.token) == 8
        assert response.invite.notes == "conference"
        assert response.remaining_quota == 9

    @pytest.mark.asyncio
    async def test_over_quota(self, unit_env):
        """The eleventh outstanding code is refused without raising."""
        use_case = await unit_env.get(IssueCodeUseCase)
        for _ in range(10):
            await use_case.execute(IssueCodeRequest(issuer_id="alice"))

        response = await use_case.execute(IssueCodeRequest(issuer_id="alice"))

        assert response.issued is False
        assert response.invite is None
        assert response.remaining_quota == 0
        assert response.message == "Invite quota exceeded"

    @pytest.mark.asyncio
    async def test_quota_not_enforced(self):
        settings = Settings(
            invitations=InvitationSettings(max_active_per_issuer=1, enforce_quota=False)
        )
        ledger = InviteLedger(
            InMemoryInviteRepository(), FixedClock(), settings.invitations
        )
        use_case = IssueCodeUseCase(invite_ledger=ledger, settings=settings)

        await use_case.execute(IssueCodeRequest(issuer_id="alice"))
        response = await use_case.execute(IssueCodeRequest(issuer_id="alice"))

        assert response.issued is True
        assert response.remaining_quota == 0

    @pytest.mark.asyncio
    async def test_empty_issuer(self, unit_env):
        use_case = await unit_env.get(IssueCodeUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(IssueCodeRequest(issuer_id=""))
