"""Invite ledger domain service.

Issues, validates, redeems and purges invite codes and email invites.

The ledger keeps no state of its own: every decision is made against the
repository, so any number of service replicas can share one store. It does
not log either; it only opens tracing spans and leaves logging and alerting
to the callers.
"""

import math
from datetime import timedelta
from typing import Callable
from uuid import uuid4

import logfire

from ledger.config import InvitationSettings
from ledger.domain.error import (
    DuplicateTokenError,
    TokenGenerationError,
    ValidationError,
)
from ledger.domain.model.invite import MAX_NOTES_LENGTH, Invite
from ledger.domain.repository import InviteRepository
from ledger.domain.value import (
    MAX_IDENTITY_LENGTH,
    MAX_TOKEN_LENGTH,
    EmailAddress,
    IdentityId,
    InviteId,
    InviteKind,
    InviteToken,
    mask_token,
)

from .base import Service
from .clock import Clock
from .tokens import generate_email_token, generate_invite_code

# Keeps expires_at inside the range datetime can represent
MAX_EXPIRATION_HOURS = 24 * 365 * 100


class InviteLedger(Service):
    """Domain service for the invite life cycle."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        clock: Clock,
        invitation_settings: InvitationSettings,
        code_generator: Callable[[], str] = generate_invite_code,
        email_token_generator: Callable[[], str] = generate_email_token,
    ) -> None:
        """Initialize invite ledger.

        Args:
            invite_repository: Invite repository
            clock: Source of the current UTC time
            invitation_settings: Expiry, quota and retry defaults
            code_generator: Produces candidate invite codes
            email_token_generator: Produces candidate email tokens
        """
        self.invite_repository = invite_repository
        self.clock = clock
        self.settings = invitation_settings
        self.code_generator = code_generator
        self.email_token_generator = email_token_generator

    async def issue_code(
        self,
        issuer_id: str,
        notes: str | None = None,
        expiration_hours: float | None = None,
    ) -> Invite:
        """Issue a new invite code.

        Args:
            issuer_id: Identity issuing the code
            notes: Optional free text
            expiration_hours: Lifetime in hours; negative values produce an
                already expired code. Defaults to the configured lifetime.

        Returns:
            The stored invite

        Raises:
            ValidationError: If issuer, notes or lifetime are invalid
            TokenGenerationError: If no unique code could be generated
        """
        issuer = self._require_identity(issuer_id, "issuer_id")
        lifetime = self._resolve_lifetime(
            expiration_hours, self.settings.default_code_expiration_hours
        )
        self._check_notes(notes)

        return await self._issue(
            InviteKind.CODE, issuer, None, notes, lifetime, self.code_generator
        )

    async def issue_email_invite(
        self,
        audience: str,
        issuer_id: str,
        notes: str | None = None,
        expiration_hours: float | None = None,
    ) -> Invite:
        """Issue a new email invite.

        The address is lowercased before it is stored or compared.

        Args:
            audience: Email address the invite is meant for
            issuer_id: Identity issuing the invite
            notes: Optional free text
            expiration_hours: Lifetime in hours. Defaults to the configured
                email invite lifetime.

        Returns:
            The stored invite

        Raises:
            ValidationError: If the address, issuer, notes or lifetime are invalid
            TokenGenerationError: If no unique token could be generated
        """
        issuer = self._require_identity(issuer_id, "issuer_id")
        email = self._normalize_audience(audience)
        lifetime = self._resolve_lifetime(
            expiration_hours, self.settings.default_email_expiration_hours
        )
        self._check_notes(notes)

        return await self._issue(
            InviteKind.EMAIL, issuer, email, notes, lifetime, self.email_token_generator
        )

    async def validate_code(self, token: str | None) -> Invite | None:
        """Look up a redeemable invite code.

        Returns None for unknown, used and expired codes alike.
        """
        return await self._validate(InviteKind.CODE, token)

    async def validate_email_invite(self, token: str | None) -> Invite | None:
        """Look up a redeemable email invite.

        Returns None for unknown, used and expired tokens alike.
        """
        return await self._validate(InviteKind.EMAIL, token)

    async def redeem_code(self, token: str | None, redeemer_id: str) -> bool:
        """Consume an invite code.

        Args:
            token: The code
            redeemer_id: Identity consuming the code

        Returns:
            True if this call redeemed the code, False otherwise

        Raises:
            ValidationError: If redeemer_id is empty
        """
        return await self._redeem(InviteKind.CODE, token, redeemer_id)

    async def redeem_email_invite(self, token: str | None, redeemer_id: str) -> bool:
        """Consume an email invite.

        Args:
            token: The email token
            redeemer_id: Identity consuming the invite

        Returns:
            True if this call redeemed the invite, False otherwise

        Raises:
            ValidationError: If redeemer_id is empty
        """
        return await self._redeem(InviteKind.EMAIL, token, redeemer_id)

    async def can_issue_more(
        self,
        issuer_id: str,
        max_active: int | None = None,
        kind: InviteKind | None = None,
    ) -> bool:
        """Check whether an issuer is below their outstanding-invite quota.

        Only unused, unexpired invites count; used and expired ones do not.

        Args:
            issuer_id: Identity to check
            max_active: Quota; defaults to the configured per-issuer maximum
            kind: Count only one kind of invite; both by default

        Returns:
            True if another invite may be issued
        """
        issuer = self._require_identity(issuer_id, "issuer_id")
        limit = self._resolve_max_active(max_active)

        with logfire.span(
            "invite_ledger.can_issue_more", issuer_id=issuer, max_active=limit
        ) as span:
            active = await self.invite_repository.count_active_by_issuer(
                issuer, self.clock.now(), kind
            )
            span.set_attribute("active", active)
            return active < limit

    async def remaining_quota(
        self,
        issuer_id: str,
        max_active: int | None = None,
        kind: InviteKind | None = None,
    ) -> int:
        """Number of invites an issuer can still have outstanding.

        Args:
            issuer_id: Identity to check
            max_active: Quota; defaults to the configured per-issuer maximum
            kind: Count only one kind of invite; both by default

        Returns:
            Remaining quota, never negative
        """
        issuer = self._require_identity(issuer_id, "issuer_id")
        limit = self._resolve_max_active(max_active)

        with logfire.span("invite_ledger.remaining_quota", issuer_id=issuer):
            active = await self.invite_repository.count_active_by_issuer(
                issuer, self.clock.now(), kind
            )
            return max(0, limit - active)

    async def count_active(
        self, issuer_id: str, kind: InviteKind | None = None
    ) -> int:
        """Count an issuer's redeemable invites.

        Args:
            issuer_id: Identity whose invites to count
            kind: Optional kind filter

        Returns:
            Number of unused, unexpired invites
        """
        issuer = self._require_identity(issuer_id, "issuer_id")

        with logfire.span("invite_ledger.count_active", issuer_id=issuer):
            return await self.invite_repository.count_active_by_issuer(
                issuer, self.clock.now(), kind
            )

    async def list_active(
        self,
        issuer_id: str,
        kind: InviteKind | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Invite]:
        """List an issuer's redeemable invites, newest first.

        Args:
            issuer_id: Identity whose invites to list
            kind: Optional kind filter
            limit: Maximum number of results, None for all
            offset: Number of results to skip

        Returns:
            List of active invites
        """
        issuer = self._require_identity(issuer_id, "issuer_id")

        with logfire.span(
            "invite_ledger.list_active",
            issuer_id=issuer,
            kind=kind.value if kind else None,
        ) as span:
            invites = await self.invite_repository.find_active_by_issuer(
                issuer, self.clock.now(), kind, limit, offset
            )
            span.set_attribute("count", len(invites))
            return invites

    async def cleanup(self) -> int:
        """Delete expired invites that were never redeemed.

        Redeemed invites are kept regardless of age. Safe to run repeatedly.

        Returns:
            Number of invites removed
        """
        with logfire.span("invite_ledger.cleanup") as span:
            removed = await self.invite_repository.delete_expired_unused(
                self.clock.now()
            )
            span.set_attribute("removed", removed)
            return removed

    async def record_email_sent(self, invite_id: InviteId) -> Invite | None:
        """Stamp the delivery time on an email invite.

        Args:
            invite_id: The invite that was mailed

        Returns:
            The updated invite, or None if it no longer exists

        Raises:
            ValidationError: If the invite is not an email invite
        """
        with logfire.span("invite_ledger.record_email_sent", invite_id=str(invite_id)):
            invite = await self.invite_repository.find_by_id(invite_id)
            if invite is None:
                return None
            if invite.kind != InviteKind.EMAIL:
                raise ValidationError(f"Invite {invite_id} is not an email invite")
            return await self.invite_repository.mark_email_sent(
                invite_id, self.clock.now()
            )

    async def _issue(
        self,
        kind: InviteKind,
        issuer: IdentityId,
        audience: EmailAddress | None,
        notes: str | None,
        lifetime: timedelta,
        generate: Callable[[], str],
    ) -> Invite:
        attempts = max(1, self.settings.token_generation_attempts)

        with logfire.span(
            "invite_ledger.issue",
            kind=kind.value,
            issuer_id=issuer,
            audience=audience.root if audience else None,
            expiration_hours=lifetime.total_seconds() / 3600,
        ) as span:
            for attempt in range(1, attempts + 1):
                created_at = self.clock.now()
                invite = Invite(
                    id=InviteId(uuid4()),
                    kind=kind,
                    token=InviteToken(generate()),
                    audience=audience,
                    issued_by=issuer,
                    created_at=created_at,
                    expires_at=created_at + lifetime,
                    notes=notes,
                )
                try:
                    saved = await self.invite_repository.add(invite)
                except DuplicateTokenError:
                    span.set_attribute("token_collisions", attempt)
                    continue
                span.set_attribute("invite_id", str(saved.id))
                return saved
            raise TokenGenerationError(attempts)

    async def _validate(self, kind: InviteKind, token: str | None) -> Invite | None:
        with logfire.span(
            "invite_ledger.validate", kind=kind.value, token=mask_token(token)
        ) as span:
            if not self._is_candidate_token(token):
                span.set_attribute("valid", False)
                return None

            invite = await self.invite_repository.find_by_token(kind, token)
            valid = invite is not None and invite.is_valid(self.clock.now())
            span.set_attribute("valid", valid)
            return invite if valid else None

    async def _redeem(
        self, kind: InviteKind, token: str | None, redeemer_id: str
    ) -> bool:
        redeemer = self._require_identity(redeemer_id, "redeemer_id")

        with logfire.span(
            "invite_ledger.redeem",
            kind=kind.value,
            token=mask_token(token),
            redeemer_id=redeemer,
        ) as span:
            if not self._is_candidate_token(token):
                span.set_attribute("redeemed", False)
                return False

            redeemed = await self.invite_repository.redeem(
                kind, token, redeemer, self.clock.now()
            )
            span.set_attribute("redeemed", redeemed is not None)
            return redeemed is not None

    @staticmethod
    def _is_candidate_token(token: str | None) -> bool:
        return isinstance(token, str) and 0 < len(token) <= MAX_TOKEN_LENGTH

    @staticmethod
    def _require_identity(value: str | None, field: str) -> IdentityId:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field} must be a non-empty string")
        if len(value) > MAX_IDENTITY_LENGTH:
            raise ValidationError(
                f"{field} must be at most {MAX_IDENTITY_LENGTH} characters"
            )
        return IdentityId(value)

    @staticmethod
    def _normalize_audience(audience: str | None) -> EmailAddress:
        if not isinstance(audience, str):
            raise ValidationError("audience must be an email address")
        try:
            return EmailAddress(audience)
        except ValueError as e:
            # pydantic's ValidationError is a ValueError
            raise ValidationError(f"Invalid audience: {audience!r}") from e

    @staticmethod
    def _resolve_lifetime(hours: float | None, default: float) -> timedelta:
        if hours is None:
            hours = default
        if isinstance(hours, bool) or not isinstance(hours, (int, float)):
            raise ValidationError("expiration_hours must be a number")
        if not math.isfinite(hours) or abs(hours) > MAX_EXPIRATION_HOURS:
            raise ValidationError(
                f"expiration_hours must be within ±{MAX_EXPIRATION_HOURS}"
            )
        return timedelta(hours=hours)

    @staticmethod
    def _check_notes(notes: str | None) -> None:
        if notes is not None and len(notes) > MAX_NOTES_LENGTH:
            raise ValidationError(
                f"notes must be at most {MAX_NOTES_LENGTH} characters"
            )

    def _resolve_max_active(self, max_active: int | None) -> int:
        if max_active is None:
            return self.settings.max_active_per_issuer
        if isinstance(max_active, bool) or not isinstance(max_active, int):
            raise ValidationError("max_active must be an integer")
        if max_active < 0:
            raise ValidationError("max_active cannot be negative")
        return max_active
