"""
Feature flag endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import SuperAdmin
from flexhub.core.exceptions import NotFoundError
from flexhub.database import get_db
from flexhub.models.site import Site
from flexhub.schemas.common import MessageResponse
from flexhub.schemas.site import (
    FeatureDefinitionsResponse,
    SiteFeatureCreate,
    SiteFeatureResponse,
    SiteFeatureUpdate,
)
from flexhub.services.feature_service import FeatureService
from flexhub.services.site_service import SiteService

router = APIRouter(tags=["Features"])


async def get_site_or_404(
    site_id: UUID,
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Site:
    site = await SiteService(db).get_by_id(site_id)
    if not site:
        raise NotFoundError("Site")
    return site


ManagedSite = Annotated[Site, Depends(get_site_or_404)]


@router.get("/features/definitions", response_model=FeatureDefinitionsResponse)
async def list_feature_definitions():
    """Every feature a site can enable, with its label and description."""
    return FeatureDefinitionsResponse(features=FeatureService.definitions())


@router.get("/sites/{site_id}/features", response_model=list[SiteFeatureResponse])
async def list_site_features(
    site: ManagedSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await FeatureService(db).list_for_site(site.id)


@router.post(
    "/sites/{site_id}/features",
    response_model=SiteFeatureResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_site_feature(
    data: SiteFeatureCreate,
    site: ManagedSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Attach a feature to a site."""
    return await FeatureService(db).add(site.id, data)


@router.put("/sites/{site_id}/features/{feature_id}", response_model=SiteFeatureResponse)
async def update_site_feature(
    feature_id: UUID,
    data: SiteFeatureUpdate,
    site: ManagedSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Toggle a feature or change its config and labels."""
    service = FeatureService(db)
    site_feature = await service.get_by_id(site.id, feature_id)
    if not site_feature:
        raise NotFoundError("Feature")
    return await service.update(site_feature, data)


@router.delete("/sites/{site_id}/features/{feature_id}", response_model=MessageResponse)
async def delete_site_feature(
    feature_id: UUID,
    site: ManagedSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = FeatureService(db)
    site_feature = await service.get_by_id(site.id, feature_id)
    if not site_feature:
        raise NotFoundError("Feature")
    await service.delete(site_feature)
    return MessageResponse(message="Feature removed successfully")
