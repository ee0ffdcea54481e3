"""Domain layer DI providers."""

from dishka import Scope, provide

from ledger.config import AuthSettings, InvitationSettings
from ledger.domain.repository import InviteRepository
from ledger.domain.service import Clock, InviteLedger, JWTService, SystemClock
from ledger.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        """Provide the wall clock."""
        return SystemClock()

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_invite_ledger(
        self,
        invite_repository: InviteRepository,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> InviteLedger:
        """Provide invite ledger domain service."""
        return InviteLedger(
            invite_repository=invite_repository,
            clock=clock,
            invitation_settings=invitation_settings,
        )
