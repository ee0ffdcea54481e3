"""Repository interfaces for the invite ledger.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from ledger.domain.repository.invite import InviteRepository

__all__ = [
    "InviteRepository",
]
