"""
User service for business logic.
"""
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from flexhub.core.exceptions import ForbiddenError
from flexhub.core.security import hash_password, verify_password
from flexhub.models.base import utcnow
from flexhub.models.user import User, UserRole
from flexhub.schemas.auth import SignInRequest, UserUpdate
from flexhub.services.invite_service import InviteService

logger = logging.getLogger(__name__)


class UserService:
    """Service for user operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def list_users(self) -> list[User]:
        """List all users with their sites, newest first."""
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.sites))
            .order_by(User.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_with_sites(self, user_id: UUID) -> User | None:
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.sites))
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        email: str,
        name: str | None = None,
        role: UserRole = UserRole.USER,
        password: str | None = None,
        image: str | None = None,
    ) -> User:
        """Create a new user."""
        user = User(
            email=email,
            name=name,
            image=image,
            role=role,
            is_active=True,
            password_hash=hash_password(password) if password else None,
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user by email and local password."""
        user = await self.get_by_email(email)
        if not user or not user.password_hash:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def sign_in(self, identity: SignInRequest) -> User:
        """Let a provider-verified identity in.

        Known users are let through. Unknown emails need an unused,
        unexpired invite; the invite's role is applied and the invite is
        consumed.
        """
        user = await self.get_by_email(identity.email)
        if user:
            if not user.is_active:
                raise ForbiddenError("User account is not active")
            await self.update_last_login(user)
            return user

        invite_service = InviteService(self.db)
        invite = await invite_service.get_valid_for_email(identity.email)
        if invite is None:
            logger.info(f"Sign-in refused for uninvited email {identity.email}")
            raise ForbiddenError("Sign-in requires a valid invitation")

        now = utcnow()
        user = User(
            email=identity.email,
            name=identity.name,
            image=identity.image,
            role=invite.role,
            is_active=True,
            is_invited=True,
            invited_by=invite.invited_by,
            invited_at=invite.invited_at,
            last_login=now,
        )
        self.db.add(user)
        await invite_service.mark_used(invite)
        await self.db.flush()
        await self.db.refresh(user)
        logger.info(f"Created invited user {user.email} with role {user.role.value}")
        return user

    async def update(self, user: User, data: UserUpdate) -> User:
        """Update a user."""
        user.apply_changes(data.model_dump(exclude_unset=True, exclude_none=True))

        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update_last_login(self, user: User) -> None:
        """Update user's last login timestamp."""
        user.last_login = utcnow()
        await self.db.flush()
        await self.db.refresh(user)

    async def set_current_site(self, user: User, site_id: UUID) -> None:
        user.current_site_id = site_id
        await self.db.flush()
        await self.db.refresh(user)
