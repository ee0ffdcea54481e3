"""Domain services."""

from .base import Service
from .clock import Clock, FixedClock, SystemClock
from .invite_ledger import InviteLedger
from .invite_mailer import InviteMailer
from .jwt_service import JWTService
from .tokens import generate_email_token, generate_invite_code

__all__ = [
    "Clock",
    "FixedClock",
    "InviteLedger",
    "InviteMailer",
    "JWTService",
    "Service",
    "SystemClock",
    "generate_email_token",
    "generate_invite_code",
]
