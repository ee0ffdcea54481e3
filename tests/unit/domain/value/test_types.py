"""Unit tests for invite value objects."""

import pytest
from pydantic import ValidationError

from ledger.domain.value import EmailAddress, InviteToken, mask_token


class TestEmailAddress:
    def test_normalizes(self):
        assert EmailAddress("  Alice@Example.ORG ").root == "alice@example.org"

    @pytest.mark.parametrize(
        "value", ["", "alice", "alice@", "@example.org", "a b@example.org", "a@b"]
    )
    def test_rejects_malformed(self, value):
        with pytest.raises(ValidationError):
            EmailAddress(value)

    def test_rejects_too_long(self):
        with pytest.raises(ValidationError):
            EmailAddress("a" * 250 + "@example.org")


class TestInviteToken:
    def test_length_bounds(self):
        InviteToken("A")
        InviteToken("A" * 255)
        with pytest.raises(ValidationError):
            InviteToken("")
        with pytest.raises(ValidationError):
            InviteToken("A" * 256)

    def test_masked(self):
        assert InviteToken("ABCD2345").masked() == "ABCD..."


@pytest.mark.parametrize("token,expected", [(None, ""), ("", ""), ("XY", "XY...")])
def test_mask_token(token, expected):
    assert mask_token(token) == expected
