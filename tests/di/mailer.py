"""Mock mailer providers for testing."""

from dishka import Scope, provide

from ledger.adapter.email import MockInviteMailer
from ledger.domain.service import InviteMailer
from ledger.util.di.infrastructure.mailer import MailerProvider


class MockMailerProvider(MailerProvider):
    """Mock mailer provider recording sent invitations."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_invite_mailer(self) -> InviteMailer:
        """Provide mock invite mailer."""
        return MockInviteMailer()
