"""Strongly typed identifiers.

Invites are keyed by UUID. Identities (issuers and redeemers) belong to the
host's identity system, so they are carried as opaque strings and never
parsed here.
"""

from typing import NewType
from uuid import UUID

InviteId = NewType("InviteId", UUID)
IdentityId = NewType("IdentityId", str)

# Matches the issued_by and redeemed_by column width
MAX_IDENTITY_LENGTH = 255
