"""Unit tests for the Invite entity."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from ledger.domain.model import Invite
from ledger.domain.value import IdentityId, InviteId, InviteKind, InviteToken

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_invite(**overrides) -> Invite:
    fields = {
        "id": InviteId(uuid4()),
        "kind": InviteKind.CODE,
        "token": InviteToken("ABCD2345"),
        "issued_by": IdentityId("alice"),
        "created_at": NOW,
        "expires_at": NOW + timedelta(hours=24),
    }
    fields.update(overrides)
    return Invite(**fields)


class TestExpiry:
    def test_valid_until_expiry_inclusive(self):
        invite = make_invite()

        assert invite.is_valid(invite.expires_at)
        assert not invite.is_expired(invite.expires_at)
        assert invite.is_expired(invite.expires_at + timedelta(microseconds=1))

    def test_used_invite_is_not_valid(self):
        invite = make_invite(is_used=True, used_at=NOW, redeemed_by="bob")

        assert not invite.is_valid(NOW)


class TestConsistency:
    def test_email_invite_requires_audience(self):
        with pytest.raises(ValidationError):
            make_invite(kind=InviteKind.EMAIL)

    def test_code_cannot_have_audience(self):
        with pytest.raises(ValidationError):
            make_invite(audience="bob@example.com")

    def test_used_at_tracks_is_used(self):
        with pytest.raises(ValidationError):
            make_invite(is_used=True)
        with pytest.raises(ValidationError):
            make_invite(used_at=NOW)

    def test_notes_length(self):
        with pytest.raises(ValidationError):
            make_invite(notes="x" * 501)

    def test_is_immutable(self):
        invite = make_invite()

        with pytest.raises(ValidationError):
            invite.is_used = True
