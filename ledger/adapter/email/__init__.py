"""Email delivery adapters."""

from .mailer import LoggingInviteMailer, MockInviteMailer, SentInvite
from .template import SUBJECT, render_invite_body

__all__ = [
    "LoggingInviteMailer",
    "MockInviteMailer",
    "SUBJECT",
    "SentInvite",
    "render_invite_body",
]
