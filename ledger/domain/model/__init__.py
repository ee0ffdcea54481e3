"""Domain model entities for the invite ledger."""

from ledger.domain.model.invite import Invite

__all__ = [
    "Invite",
]
