"""
Invite service: single-use, expiring invitations that gate first sign-in.
"""
import uuid
from datetime import timedelta
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from flexhub.config import settings
from flexhub.core.exceptions import BadRequestError, ConflictError
from flexhub.models.base import utcnow
from flexhub.models.user import Invite, User, UserRole


class InviteService:
    """Service for invite operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, invite_id: UUID) -> Invite | None:
        result = await self.db.execute(
            select(Invite)
            .options(selectinload(Invite.inviter))
            .where(Invite.id == invite_id)
        )
        return result.scalar_one_or_none()

    async def list_invites(self) -> list[Invite]:
        """All invites, most recent first."""
        result = await self.db.execute(
            select(Invite)
            .options(selectinload(Invite.inviter))
            .order_by(Invite.invited_at.desc())
        )
        return list(result.scalars().all())

    async def get_valid_for_email(self, email: str) -> Invite | None:
        """The newest unused, unexpired invite for an email."""
        result = await self.db.execute(
            select(Invite)
            .where(
                Invite.email == email,
                Invite.is_used.is_(False),
                Invite.expires_at > utcnow(),
            )
            .order_by(Invite.invited_at.desc())
        )
        return result.scalars().first()

    async def create(self, email: str, role: UserRole, inviter: User) -> Invite:
        """Create an invite valid for INVITE_EXPIRE_DAYS."""
        existing_user = await self.db.execute(select(User.id).where(User.email == email))
        if existing_user.first():
            raise ConflictError("User with this email already exists")

        existing_invite = await self.db.execute(select(Invite.id).where(Invite.email == email))
        if existing_invite.first():
            raise ConflictError("Invite for this email already exists")

        invite = Invite(
            email=email,
            role=role,
            token=str(uuid.uuid4()),
            invited_by=inviter.id,
            invited_at=utcnow(),
            expires_at=utcnow() + timedelta(days=settings.INVITE_EXPIRE_DAYS),
        )
        self.db.add(invite)
        await self.db.flush()
        return await self._reload(invite.id)

    async def update_role(self, invite: Invite, role: UserRole) -> Invite:
        if invite.is_used:
            raise BadRequestError("Cannot update used invite")
        invite.role = role
        await self.db.flush()
        return await self._reload(invite.id)

    async def delete(self, invite: Invite) -> None:
        if invite.is_used:
            raise BadRequestError("Cannot delete used invite")
        await self.db.delete(invite)
        await self.db.flush()

    async def mark_used(self, invite: Invite) -> None:
        invite.is_used = True
        invite.used_at = utcnow()
        await self.db.flush()

    async def _reload(self, invite_id: UUID) -> Invite:
        result = await self.db.execute(
            select(Invite)
            .options(selectinload(Invite.inviter))
            .where(Invite.id == invite_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
