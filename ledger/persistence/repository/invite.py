"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.domain.error import DuplicateTokenError
from ledger.domain.model import Invite
from ledger.domain.repository import InviteRepository
from ledger.domain.value import IdentityId, InviteId, InviteKind
from ledger.persistence.mappers import invite_to_dict, row_to_invite
from ledger.persistence.tables import invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def add(self, invite: Invite) -> Invite:
        """Insert a new invite.

        The insert runs in a savepoint so that a token collision leaves the
        surrounding transaction usable for the next attempt.

        Raises:
            DuplicateTokenError: If the token is already taken
        """
        stmt = insert(invites_table).values(**invite_to_dict(invite))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if "uq_invites_token" in str(e.orig):
                raise DuplicateTokenError(invite.token.masked()) from e
            raise
        return invite

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        stmt = select(invites_table).where(invites_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_token(self, kind: InviteKind, token: str) -> Optional[Invite]:
        """Find an invite by kind and exact token."""
        stmt = select(invites_table).where(
            and_(
                invites_table.c.token == token,
                invites_table.c.kind == kind.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def redeem(
        self,
        kind: InviteKind,
        token: str,
        redeemer_id: IdentityId,
        now: datetime,
    ) -> Optional[Invite]:
        """Mark an invite as used with a single conditional UPDATE.

        Concurrent redeemers serialize on the row lock; once the first one
        commits, the others re-evaluate ``NOT is_used`` and match nothing.
        """
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.token == token,
                    invites_table.c.kind == kind.value,
                    invites_table.c.is_used.is_(False),
                    invites_table.c.expires_at >= now,
                )
            )
            .values(is_used=True, used_at=now, redeemed_by=redeemer_id)
            .returning(*invites_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def count_active_by_issuer(
        self, issuer_id: IdentityId, now: datetime, kind: InviteKind | None = None
    ) -> int:
        """Count unused, unexpired invites issued by an identity."""
        stmt = (
            select(func.count())
            .select_from(invites_table)
            .where(self._active_by_issuer(issuer_id, now, kind))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_active_by_issuer(
        self,
        issuer_id: IdentityId,
        now: datetime,
        kind: InviteKind | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Invite]:
        """Find unused, unexpired invites issued by an identity, newest first."""
        stmt = (
            select(invites_table)
            .where(self._active_by_issuer(issuer_id, now, kind))
            .order_by(invites_table.c.created_at.desc(), invites_table.c.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_invite(dict(row)) for row in result.mappings()]

    async def delete_expired_unused(self, now: datetime) -> int:
        """Delete expired invites that were never used."""
        stmt = delete(invites_table).where(
            and_(
                invites_table.c.is_used.is_(False),
                invites_table.c.expires_at < now,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def mark_email_sent(
        self, invite_id: InviteId, sent_at: datetime
    ) -> Optional[Invite]:
        """Record when an email invite was delivered."""
        stmt = (
            update(invites_table)
            .where(invites_table.c.id == invite_id)
            .values(email_sent_at=sent_at)
            .returning(*invites_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    @staticmethod
    def _active_by_issuer(
        issuer_id: IdentityId, now: datetime, kind: InviteKind | None
    ):
        conditions = [
            invites_table.c.issued_by == issuer_id,
            invites_table.c.is_used.is_(False),
            invites_table.c.expires_at >= now,
        ]
        if kind is not None:
            conditions.append(invites_table.c.kind == kind.value)
        return and_(*conditions)
