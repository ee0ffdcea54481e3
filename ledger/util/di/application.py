"""Application layer DI providers."""

from dishka import Scope, provide

from ledger.application.usecase.invite import (
    CleanupInvitesUseCase,
    GetActiveInvitesUseCase,
    IssueCodeUseCase,
    IssueEmailInvitesUseCase,
    RedeemInviteUseCase,
    ValidateInviteUseCase,
)
from ledger.config import Settings
from ledger.domain.service import InviteLedger, InviteMailer
from ledger.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Issuance
    @provide(scope=Scope.REQUEST)
    def get_issue_code_use_case(
        self, invite_ledger: InviteLedger, settings: Settings
    ) -> IssueCodeUseCase:
        """Provide issue code use case."""
        return IssueCodeUseCase(invite_ledger=invite_ledger, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_issue_email_invites_use_case(
        self,
        invite_ledger: InviteLedger,
        invite_mailer: InviteMailer,
        settings: Settings,
    ) -> IssueEmailInvitesUseCase:
        """Provide issue email invites use case."""
        return IssueEmailInvitesUseCase(
            invite_ledger=invite_ledger,
            invite_mailer=invite_mailer,
            settings=settings,
        )

    # Validation and redemption
    @provide(scope=Scope.REQUEST)
    def get_validate_invite_use_case(
        self, invite_ledger: InviteLedger
    ) -> ValidateInviteUseCase:
        """Provide validate invite use case."""
        return ValidateInviteUseCase(invite_ledger=invite_ledger)

    @provide(scope=Scope.REQUEST)
    def get_redeem_invite_use_case(
        self, invite_ledger: InviteLedger
    ) -> RedeemInviteUseCase:
        """Provide redeem invite use case."""
        return RedeemInviteUseCase(invite_ledger=invite_ledger)

    # Listing and maintenance
    @provide(scope=Scope.REQUEST)
    def get_active_invites_use_case(
        self, invite_ledger: InviteLedger
    ) -> GetActiveInvitesUseCase:
        """Provide get active invites use case."""
        return GetActiveInvitesUseCase(invite_ledger=invite_ledger)

    @provide(scope=Scope.REQUEST)
    def get_cleanup_invites_use_case(
        self, invite_ledger: InviteLedger
    ) -> CleanupInvitesUseCase:
        """Provide cleanup invites use case."""
        return CleanupInvitesUseCase(invite_ledger=invite_ledger)
