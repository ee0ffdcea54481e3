"""Domain value objects for the invite ledger."""

from ledger.domain.value.identifiers import MAX_IDENTITY_LENGTH, IdentityId, InviteId
from ledger.domain.value.types import (
    CODE_ALPHABET,
    CODE_LENGTH,
    MAX_TOKEN_LENGTH,
    EmailAddress,
    InviteKind,
    InviteToken,
    mask_token,
)

__all__ = [
    # Identifiers
    "IdentityId",
    "InviteId",
    "MAX_IDENTITY_LENGTH",
    # Types
    "CODE_ALPHABET",
    "CODE_LENGTH",
    "MAX_TOKEN_LENGTH",
    "EmailAddress",
    "InviteKind",
    "InviteToken",
    "mask_token",
]
