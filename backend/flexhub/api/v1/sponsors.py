"""
Sponsor endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import SponsorsSite
from flexhub.core.exceptions import NotFoundError
from flexhub.database import get_db
from flexhub.schemas.common import MessageResponse
from flexhub.schemas.sponsor import SponsorCreate, SponsorResponse, SponsorUpdate
from flexhub.services.sponsor_service import SponsorService

router = APIRouter(prefix="/sites/{site_id}/sponsors", tags=["Sponsors"])


@router.get("", response_model=list[SponsorResponse])
async def list_sponsors(
    site: SponsorsSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await SponsorService(db).list_for_site(site.id)


@router.post("", response_model=SponsorResponse, status_code=status.HTTP_201_CREATED)
async def create_sponsor(
    data: SponsorCreate,
    site: SponsorsSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await SponsorService(db).create(site.id, data)


@router.get("/{sponsor_id}", response_model=SponsorResponse)
async def get_sponsor(
    sponsor_id: UUID,
    site: SponsorsSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    sponsor = await SponsorService(db).get_by_id(site.id, sponsor_id)
    if not sponsor:
        raise NotFoundError("Sponsor")
    return sponsor


@router.put("/{sponsor_id}", response_model=SponsorResponse)
async def update_sponsor(
    sponsor_id: UUID,
    data: SponsorUpdate,
    site: SponsorsSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = SponsorService(db)
    sponsor = await service.get_by_id(site.id, sponsor_id)
    if not sponsor:
        raise NotFoundError("Sponsor")
    return await service.update(sponsor, data)


@router.delete("/{sponsor_id}", response_model=MessageResponse)
async def delete_sponsor(
    sponsor_id: UUID,
    site: SponsorsSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = SponsorService(db)
    sponsor = await service.get_by_id(site.id, sponsor_id)
    if not sponsor:
        raise NotFoundError("Sponsor")
    await service.delete(sponsor)
    return MessageResponse(message="Sponsor deleted successfully")
