"""
Sponsor service.
"""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.models.sponsor import Sponsor
from flexhub.schemas.sponsor import SponsorCreate, SponsorUpdate


class SponsorService:
    """Service for sponsor operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, site_id: UUID, sponsor_id: UUID) -> Sponsor | None:
        result = await self.db.execute(
            select(Sponsor).where(Sponsor.id == sponsor_id, Sponsor.site_id == site_id)
        )
        return result.scalar_one_or_none()

    async def list_for_site(self, site_id: UUID, active_only: bool = False) -> list[Sponsor]:
        """Newest first."""
        query = select(Sponsor).where(Sponsor.site_id == site_id)
        if active_only:
            query = query.where(Sponsor.active.is_(True))
        result = await self.db.execute(query.order_by(Sponsor.created_at.desc()))
        return list(result.scalars().all())

    async def create(self, site_id: UUID, data: SponsorCreate) -> Sponsor:
        sponsor = Sponsor(site_id=site_id, **data.model_dump())
        self.db.add(sponsor)
        await self.db.flush()
        await self.db.refresh(sponsor)
        return sponsor

    async def update(self, sponsor: Sponsor, data: SponsorUpdate) -> Sponsor:
        sponsor.apply_changes(data.model_dump(exclude_unset=True))
        await self.db.flush()
        await self.db.refresh(sponsor)
        return sponsor

    async def delete(self, sponsor: Sponsor) -> None:
        await self.db.delete(sponsor)
        await self.db.flush()
