"""Domain layer errors.

Expected outcomes such as an unknown, expired or already used token are not
errors: the ledger returns None or False for those. Exceptions are reserved
for callers breaking the contract and for infrastructure failures.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Caller passed input that violates an invariant."""

    pass


class StoreError(DomainError):
    """The invite store could not complete an operation."""

    pass


class DuplicateTokenError(StoreError):
    """Raised by repositories when a token is already taken."""

    def __init__(self, token_hint: str):
        self.token_hint = token_hint
        super().__init__(f"Invite token already exists: {token_hint}")


class TokenGenerationError(StoreError):
    """Raised when no unique token could be generated."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not generate a unique invite token after {attempts} attempts")


class DeliveryError(DomainError):
    """An invitation email could not be handed to the transport."""

    def __init__(self, recipient: str, reason: str):
        self.recipient = recipient
        super().__init__(f"Could not deliver invite to {recipient}: {reason}")
