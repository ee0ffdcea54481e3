"""Invite value objects."""

import re
from enum import Enum

from pydantic import field_validator

from ledger.domain.value.common import RootValueObject

# Unambiguous symbols for human-shareable codes: no 0/O, 1/I/L
CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 8

MAX_TOKEN_LENGTH = 255

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class InviteKind(str, Enum):
    """Kind of invitation token."""

    CODE = "code"  # Short code, shared by hand
    EMAIL = "email"  # Long token, bound to an email address


class InviteToken(RootValueObject[str]):
    """Invite token, either a short code or a URL-safe email token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token length."""
        if len(v) < 1 or len(v) > MAX_TOKEN_LENGTH:
            raise ValueError(f"Token must be 1-{MAX_TOKEN_LENGTH} characters")
        return v

    def masked(self) -> str:
        """Short prefix that is safe to put in traces and logs."""
        return mask_token(self.root)


class EmailAddress(RootValueObject[str]):
    """Email address, normalized to lowercase."""

    @field_validator("root")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Strip, lowercase, and check the basic shape of the address."""
        v = v.strip().lower()
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        if not _EMAIL_RE.match(v):
            raise ValueError(f"Invalid email address: {v!r}")
        return v


def mask_token(token: str | None) -> str:
    """Mask a raw token for tracing.

    Codes are only eight characters long, so only the first four are kept.
    """
    if not token:
        return ""
    return token[:4] + "..."
