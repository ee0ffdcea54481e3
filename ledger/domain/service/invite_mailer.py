"""Email invite delivery port."""

from abc import ABC, abstractmethod

from ledger.domain.model.invite import Invite


class InviteMailer(ABC):
    """Delivers email invites.

    Implementations live in the adapter layer. The transport itself (SMTP,
    SES, ...) is the host's concern.
    """

    @abstractmethod
    async def send_invite(self, invite: Invite, link: str) -> bool:
        """Send a single invitation email.

        Args:
            invite: Email invite to deliver
            link: Registration link carrying the invite token

        Returns:
            True if the message was accepted for delivery

        Raises:
            DeliveryError: If the transport failed
        """
        pass
