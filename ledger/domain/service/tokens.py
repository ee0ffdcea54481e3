"""Invite token generation.

Both generators draw from ``secrets``. Codes trade brute-force resistance for
being easy to read out and type; email tokens are long enough that guessing
is infeasible.
"""

import secrets

from ledger.domain.value import CODE_ALPHABET, CODE_LENGTH

# 48 random bytes encode to exactly 64 base64url characters, no padding
EMAIL_TOKEN_BYTES = 48


def generate_invite_code() -> str:
    """Generate an 8-character code from the unambiguous alphabet."""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def generate_email_token() -> str:
    """Generate a 64-character URL-safe token (``A-Z a-z 0-9 - _``)."""
    return secrets.token_urlsafe(EMAIL_TOKEN_BYTES)
