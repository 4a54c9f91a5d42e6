"""
Site service for business logic.
"""
import re
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from flexhub.core.exceptions import BadRequestError, ConflictError
from flexhub.models.site import Site
from flexhub.models.user import User
from flexhub.schemas.site import SiteCreate, SiteUpdate

# Dot separated labels of letters, digits and inner hyphens, 63 chars max each
DOMAIN_PATTERN = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(\.[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

SITE_IMAGE_COLUMNS = {
    "logo": "logo",
    "coverImage": "cover_image",
}


def is_valid_domain(domain: str) -> bool:
    return bool(DOMAIN_PATTERN.match(domain))


class SiteService:
    """Service for site operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _detail_options() -> list:
        return [
            selectinload(Site.users),
            selectinload(Site.pages),
            selectinload(Site.blog_posts),
            selectinload(Site.media_files),
            selectinload(Site.features),
        ]

    async def get_by_id(self, site_id: UUID, with_details: bool = False) -> Site | None:
        """Get site by ID, optionally with members, content and features loaded."""
        query = select(Site).where(Site.id == site_id)
        if with_details:
            query = query.options(*self._detail_options()).execution_options(
                populate_existing=True
            )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_for_user(
        self,
        site_id: UUID,
        user: User,
        with_details: bool = False,
    ) -> Site | None:
        """Get a site the user may access: any site for super admins, else member sites."""
        query = select(Site).where(Site.id == site_id)
        if not user.is_super_admin:
            query = query.where(Site.users.any(User.id == user.id))
        if with_details:
            query = query.options(*self._detail_options()).execution_options(
                populate_existing=True
            )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_for_user(self, user: User) -> list[Site]:
        """List sites visible to the user, newest first."""
        query = select(Site).options(*self._detail_options())
        if not user.is_super_admin:
            query = query.where(Site.users.any(User.id == user.id))
        query = query.order_by(Site.created_at.desc()).execution_options(
            populate_existing=True
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_all(self) -> list[Site]:
        result = await self.db.execute(
            select(Site)
            .options(selectinload(Site.features))
            .order_by(Site.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def _check_unique(self, name: str, domain: str | None, exclude_id: UUID | None = None) -> None:
        query = select(Site.id).where(Site.name == name)
        if exclude_id:
            query = query.where(Site.id != exclude_id)
        if (await self.db.execute(query)).first():
            raise ConflictError("A site with this name already exists")

        if domain:
            query = select(Site.id).where(Site.domain == domain)
            if exclude_id:
                query = query.where(Site.id != exclude_id)
            if (await self.db.execute(query)).first():
                raise ConflictError("A site with this domain already exists")

    async def create(self, data: SiteCreate, creator: User) -> Site:
        """Create a new site and connect its creator to it."""
        if data.domain and not is_valid_domain(data.domain):
            raise BadRequestError("Invalid domain format")
        await self._check_unique(data.name, data.domain)

        site = Site(
            name=data.name,
            description=data.description,
            domain=data.domain,
        )
        site.users.append(creator)
        self.db.add(site)
        await self.db.flush()
        return await self.get_by_id(site.id, with_details=True)

    async def update(self, site: Site, data: SiteUpdate) -> Site:
        """Update a site."""
        if data.domain and not is_valid_domain(data.domain):
            raise BadRequestError("Invalid domain format")
        await self._check_unique(data.name, data.domain, exclude_id=site.id)

        site.apply_changes(data.model_dump(exclude_unset=True))

        await self.db.flush()
        return await self.get_by_id(site.id, with_details=True)

    async def delete(self, site: Site) -> None:
        """Delete a site with everything it owns."""
        await self.db.execute(
            update(User)
            .where(User.current_site_id == site.id)
            .values(current_site_id=None)
        )
        await self.db.delete(site)
        await self.db.flush()

    async def set_image(self, site: Site, image_type: str, url: str | None) -> str | None:
        """Point the logo or cover image column at `url`; returns the previous value."""
        column = SITE_IMAGE_COLUMNS[image_type]
        previous = getattr(site, column)
        setattr(site, column, url)
        await self.db.flush()
        return previous

    async def add_user(self, site: Site, user: User) -> bool:
        """Connect a user to a site. False when already connected."""
        site = await self.get_by_id(site.id, with_details=True)
        if any(member.id == user.id for member in site.users):
            return False
        site.users.append(user)
        await self.db.flush()
        return True

    async def remove_user(self, site: Site, user_id: UUID) -> bool:
        """Disconnect a user from a site. False when the user was not connected."""
        site = await self.get_by_id(site.id, with_details=True)
        member = next((u for u in site.users if u.id == user_id), None)
        if member is None:
            return False
        site.users.remove(member)
        if member.current_site_id == site.id:
            member.current_site_id = None
        await self.db.flush()
        return True
