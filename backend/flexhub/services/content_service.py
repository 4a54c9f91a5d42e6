"""
Page and blog post services.
"""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.exceptions import ConflictError
from flexhub.models.base import utcnow
from flexhub.models.content import BlogPost, Page
from flexhub.schemas.content import PageCreate, PageUpdate


class PageService:
    """Service for page operations. Slugs are unique within a site."""

    model = Page
    label = "page"

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, site_id: UUID, item_id: UUID):
        result = await self.db.execute(
            select(self.model).where(
                self.model.id == item_id,
                self.model.site_id == site_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_site(self, site_id: UUID) -> list:
        """Most recently updated first."""
        result = await self.db.execute(
            select(self.model)
            .where(self.model.site_id == site_id)
            .order_by(self.model.updated_at.desc())
        )
        return list(result.scalars().all())

    async def _check_slug(self, site_id: UUID, slug: str, exclude_id: UUID | None = None) -> None:
        query = select(self.model.id).where(
            self.model.site_id == site_id,
            self.model.slug == slug,
        )
        if exclude_id:
            query = query.where(self.model.id != exclude_id)
        if (await self.db.execute(query)).first():
            raise ConflictError(f"A {self.label} with this slug already exists")

    async def create(self, site_id: UUID, data: PageCreate):
        await self._check_slug(site_id, data.slug)
        item = self.model(site_id=site_id, **data.model_dump())
        self._before_save(item)
        self.db.add(item)
        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def update(self, item, data: PageUpdate):
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("slug") and update_data["slug"] != item.slug:
            await self._check_slug(item.site_id, update_data["slug"], exclude_id=item.id)

        item.apply_changes(update_data)
        self._before_save(item)

        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def delete(self, item) -> None:
        await self.db.delete(item)
        await self.db.flush()

    def _before_save(self, item) -> None:
        pass


class BlogPostService(PageService):
    """Service for blog posts; stamps published_at on first publication."""

    model = BlogPost
    label = "blog post"

    def _before_save(self, item: BlogPost) -> None:
        if item.is_published and item.published_at is None:
            item.published_at = utcnow()
