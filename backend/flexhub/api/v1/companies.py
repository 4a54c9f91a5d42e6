"""
Job board company endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import JobBoardSite
from flexhub.core.exceptions import NotFoundError
from flexhub.database import get_db
from flexhub.schemas.common import MessageResponse
from flexhub.schemas.job_board import (
    CompanyCreate,
    CompanyDetail,
    CompanyResponse,
    CompanyUpdate,
    CompanyWithCount,
    JobListingResponse,
)
from flexhub.services.job_board_service import CompanyService

router = APIRouter(prefix="/sites/{site_id}/companies", tags=["Job Board"])


@router.get("", response_model=list[CompanyWithCount])
async def list_companies(
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Companies of the site, newest first, with their job listing counts."""
    rows = await CompanyService(db).list_with_counts(site.id)
    return [
        CompanyWithCount(
            **CompanyResponse.model_validate(company).model_dump(),
            job_listing_count=count,
        )
        for company, count in rows
    ]


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    data: CompanyCreate,
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await CompanyService(db).create(site.id, data)


@router.get("/{company_id}", response_model=CompanyDetail)
async def get_company(
    company_id: UUID,
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """A company with its active job listings."""
    service = CompanyService(db)
    company = await service.get_by_id(site.id, company_id)
    if not company:
        raise NotFoundError("Company")

    listings = await service.active_listings(company)
    return CompanyDetail(
        **CompanyResponse.model_validate(company).model_dump(),
        job_listings=[JobListingResponse.model_validate(listing) for listing in listings],
    )


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: UUID,
    data: CompanyUpdate,
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = CompanyService(db)
    company = await service.get_by_id(site.id, company_id)
    if not company:
        raise NotFoundError("Company")
    return await service.update(company, data)


@router.delete("/{company_id}", response_model=MessageResponse)
async def delete_company(
    company_id: UUID,
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a company. Refused while job listings reference it."""
    service = CompanyService(db)
    company = await service.get_by_id(site.id, company_id)
    if not company:
        raise NotFoundError("Company")
    await service.delete(company)
    return MessageResponse(message="Company deleted successfully")
