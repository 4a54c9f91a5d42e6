"""
Per-site feature flags.
"""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.exceptions import ConflictError
from flexhub.models.site import FEATURE_DEFINITIONS, FeatureType, SiteFeature
from flexhub.schemas.site import SiteFeatureCreate, SiteFeatureUpdate


class FeatureService:
    """Service for site feature operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def definitions() -> list[dict]:
        return [
            {
                "value": feature,
                "label": definition["display_name"],
                "description": definition["description"],
            }
            for feature, definition in FEATURE_DEFINITIONS.items()
        ]

    async def is_enabled(self, site_id: UUID, feature: FeatureType) -> bool:
        """Read the flag straight from the database, never from the session cache."""
        result = await self.db.execute(
            select(SiteFeature.is_enabled).where(
                SiteFeature.site_id == site_id,
                SiteFeature.feature == feature,
            )
        )
        return bool(result.scalar_one_or_none())

    async def list_for_site(self, site_id: UUID) -> list[SiteFeature]:
        result = await self.db.execute(
            select(SiteFeature)
            .where(SiteFeature.site_id == site_id)
            .order_by(SiteFeature.created_at.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, site_id: UUID, feature_id: UUID) -> SiteFeature | None:
        result = await self.db.execute(
            select(SiteFeature).where(
                SiteFeature.id == feature_id,
                SiteFeature.site_id == site_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_type(self, site_id: UUID, feature: FeatureType) -> SiteFeature | None:
        result = await self.db.execute(
            select(SiteFeature).where(
                SiteFeature.site_id == site_id,
                SiteFeature.feature == feature,
            )
        )
        return result.scalar_one_or_none()

    async def add(self, site_id: UUID, data: SiteFeatureCreate) -> SiteFeature:
        """Attach a feature to a site using its standard name and description."""
        if await self.get_by_type(site_id, data.feature):
            raise ConflictError("Feature already exists for this site")

        definition = FEATURE_DEFINITIONS[data.feature]
        site_feature = SiteFeature(
            site_id=site_id,
            feature=data.feature,
            display_name=definition["display_name"],
            description=definition["description"],
            is_enabled=data.is_enabled,
            config=data.config,
        )
        self.db.add(site_feature)
        await self.db.flush()
        await self.db.refresh(site_feature)
        return site_feature

    async def update(self, site_feature: SiteFeature, data: SiteFeatureUpdate) -> SiteFeature:
        site_feature.apply_changes(data.model_dump(exclude_unset=True))

        await self.db.flush()
        await self.db.refresh(site_feature)
        return site_feature

    async def delete(self, site_feature: SiteFeature) -> None:
        await self.db.delete(site_feature)
        await self.db.flush()
