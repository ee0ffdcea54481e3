"""PostgreSQL repository implementations."""

from ledger.persistence.repository.invite import PostgresInviteRepository

__all__ = [
    "PostgresInviteRepository",
]
