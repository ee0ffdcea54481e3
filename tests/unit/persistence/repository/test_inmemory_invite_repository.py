"""Unit tests for InMemoryInviteRepository."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from ledger.domain.error import DuplicateTokenError
from ledger.domain.model import Invite
from ledger.domain.value import IdentityId, InviteId, InviteKind, InviteToken
from ledger.persistence.repository.inmemory import InMemoryInviteRepository

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_invite(token: str, kind: InviteKind = InviteKind.CODE, **overrides) -> Invite:
    fields = {
        "id": InviteId(uuid4()),
        "kind": kind,
        "token": InviteToken(token),
        "audience": "bob@example.com" if kind == InviteKind.EMAIL else None,
        "issued_by": IdentityId("alice"),
        "created_at": NOW,
        "expires_at": NOW + timedelta(hours=1),
    }
    fields.update(overrides)
    return Invite(**fields)


@pytest.fixture
def repo():
    return InMemoryInviteRepository()


class TestAdd:
    @pytest.mark.asyncio
    async def test_duplicate_token_across_kinds(self, repo):
        """Tokens are unique regardless of kind."""
        await repo.add(make_invite("SAME2345"))

        with pytest.raises(DuplicateTokenError):
            await repo.add(make_invite("SAME2345", kind=InviteKind.EMAIL))


class TestRedeem:
    @pytest.mark.asyncio
    async def test_redeem_sets_fields(self, repo):
        invite = await repo.add(make_invite("ABCD2345"))

        redeemed = await repo.redeem(InviteKind.CODE, "ABCD2345", "bob", NOW)

        assert redeemed.id == invite.id
        assert redeemed.is_used is True
        assert redeemed.used_at == NOW
        assert redeemed.redeemed_by == "bob"
        assert (await repo.find_by_id(invite.id)).is_used is True

    @pytest.mark.asyncio
    async def test_redeem_at_expiry_boundary(self, repo):
        invite = await repo.add(make_invite("ABCD2345"))

        late = invite.expires_at + timedelta(seconds=1)
        assert await repo.redeem(InviteKind.CODE, "ABCD2345", "bob", late) is None
        assert await repo.redeem(
            InviteKind.CODE, "ABCD2345", "bob", invite.expires_at
        ) is not None

    @pytest.mark.asyncio
    async def test_redeem_wrong_kind(self, repo):
        await repo.add(make_invite("ABCD2345"))

        assert await repo.redeem(InviteKind.EMAIL, "ABCD2345", "bob", NOW) is None


class TestActiveQueries:
    @pytest.mark.asyncio
    async def test_count_and_find(self, repo):
        await repo.add(make_invite("AAAA2345"))
        await repo.add(make_invite("BBBB2345", kind=InviteKind.EMAIL))
        await repo.add(make_invite("CCCC2345", issued_by=IdentityId("carol")))
        await repo.add(
            make_invite("DDDD2345", expires_at=NOW - timedelta(minutes=1))
        )

        assert await repo.count_active_by_issuer("alice", NOW) == 2
        assert await repo.count_active_by_issuer("alice", NOW, InviteKind.EMAIL) == 1
        found = await repo.find_active_by_issuer("alice", NOW, limit=1)
        assert len(found) == 1


class TestDeleteExpiredUnused:
    @pytest.mark.asyncio
    async def test_keeps_used_invites(self, repo):
        await repo.add(make_invite("AAAA2345"))
        await repo.redeem(InviteKind.CODE, "AAAA2345", "bob", NOW)
        await repo.add(make_invite("BBBB2345"))

        removed = await repo.delete_expired_unused(NOW + timedelta(hours=2))

        assert removed == 1
        assert await repo.find_by_token(InviteKind.CODE, "AAAA2345") is not None
        assert await repo.find_by_token(InviteKind.CODE, "BBBB2345") is None


class TestMarkEmailSent:
    @pytest.mark.asyncio
    async def test_missing_invite(self, repo):
        assert await repo.mark_email_sent(InviteId(uuid4()), NOW) is None
