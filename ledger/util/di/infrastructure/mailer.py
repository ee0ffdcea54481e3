"""Email delivery infrastructure providers."""

from dishka import Scope, provide

from ledger.adapter.email import LoggingInviteMailer
from ledger.config import Settings
from ledger.domain.service import InviteMailer
from ledger.util.di.base import ProviderBase


class MailerProvider(ProviderBase):
    """Mailer component base."""

    __mock_component__ = "mailer"


class ProdMailerProvider(MailerProvider):
    """Production mailer provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_invite_mailer(self, settings: Settings) -> InviteMailer:
        """Provide the invite mailer.

        No transport is wired in; the mailer renders the message and logs it.
        """
        return LoggingInviteMailer(mail_from=settings.invitations.mail_from)
