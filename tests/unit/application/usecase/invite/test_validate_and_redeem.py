"""Unit tests for ValidateInviteUseCase and RedeemInviteUseCase."""

import pytest

from ledger.application.usecase.invite import (
    INVALID_INVITE_MESSAGE,
    RedeemInviteRequest,
    RedeemInviteUseCase,
    ValidateInviteRequest,
    ValidateInviteUseCase,
)
from ledger.domain.service import InviteLedger
from ledger.domain.value import InviteKind
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestValidateInvite:
    @pytest.mark.asyncio
    async def test_valid_email_invite_without_kind(self, unit_env):
        """Kind is inferred when the caller does not give one."""
        ledger = await unit_env.get(InviteLedger)
        use_case = await unit_env.get(ValidateInviteUseCase)
        invite = await ledger.issue_email_invite("bob@example.com", "alice")

        response = await use_case.execute(
            ValidateInviteRequest(token=invite.token.root)
        )

        assert response.valid is True
        assert response.kind == InviteKind.EMAIL
        assert response.audience == "bob@example.com"
        assert response.expires_at == invite.expires_at

    @pytest.mark.asyncio
    async def test_wrong_kind(self, unit_env):
        ledger = await unit_env.get(InviteLedger)
        use_case = await unit_env.get(ValidateInviteUseCase)
        invite = await ledger.issue_code("alice")

        response = await use_case.execute(
            ValidateInviteRequest(token=invite.token.root, kind=InviteKind.EMAIL)
        )

        assert response.valid is False

    @pytest.mark.asyncio
    async def test_unknown_used_and_expired_look_the_same(self, unit_env):
        """Failures never reveal why the invite was rejected."""
        ledger = await unit_env.get(InviteLedger)
        use_case = await unit_env.get(ValidateInviteUseCase)
        used = await ledger.issue_code("alice")
        await ledger.redeem_code(used.token.root, "bob")
        expired = await ledger.issue_code("alice", expiration_hours=-1)

        responses = [
            await use_case.execute(ValidateInviteRequest(token=token))
            for token in ["NOPE2345", used.token.root, expired.token.root]
        ]

        assert all(r.valid is False for r in responses)
        assert {r.message for r in responses} == {INVALID_INVITE_MESSAGE}
        assert all(r.kind is None and r.expires_at is None for r in responses)


class TestRedeemInvite:
    @pytest.mark.asyncio
    async def test_redeem_code_once(self, unit_env):
        ledger = await unit_env.get(InviteLedger)
        use_case = await unit_env.get(RedeemInviteUseCase)
        invite = await ledger.issue_code("alice")

        first = await use_case.execute(
            RedeemInviteRequest(token=invite.token.root, redeemer_id="bob")
        )
        second = await use_case.execute(
            RedeemInviteRequest(token=invite.token.root, redeemer_id="carol")
        )

        assert first.redeemed is True
        assert first.kind == InviteKind.CODE
        assert second.redeemed is False
        assert second.message == INVALID_INVITE_MESSAGE

    @pytest.mark.asyncio
    async def test_redeem_email_invite_with_kind(self, unit_env):
        ledger = await unit_env.get(InviteLedger)
        use_case = await unit_env.get(RedeemInviteUseCase)
        invite = await ledger.issue_email_invite("bob@example.com", "alice")

        response = await use_case.execute(
            RedeemInviteRequest(
                token=invite.token.root, redeemer_id="bob", kind=InviteKind.EMAIL
            )
        )

        assert response.redeemed is True
        assert await ledger.validate_email_invite(invite.token.root) is None
