"""
Job listing endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import JobBoardSite, Paging
from flexhub.core.exceptions import BadRequestError, NotFoundError
from flexhub.database import get_db
from flexhub.models.job_board import JobStatus, JobType
from flexhub.schemas.common import MessageResponse, Pagination
from flexhub.schemas.job_board import (
    JobListingCreate,
    JobListingImageResponse,
    JobListingListResponse,
    JobListingUpdate,
    JobListingWithCompany,
)
from flexhub.services.job_board_service import JobListingFilters, JobListingService
from flexhub.services.media_service import MediaService

router = APIRouter(prefix="/sites/{site_id}/job-listings", tags=["Job Board"])


@router.get("", response_model=JobListingListResponse)
async def list_job_listings(
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    pagination: Paging,
    status_filter: Annotated[JobStatus | None, Query(alias="status")] = None,
    job_type: Annotated[JobType | None, Query(alias="jobType")] = None,
    company_id: Annotated[UUID | None, Query(alias="companyId")] = None,
    search: str | None = None,
):
    """Listings of the site, newest first, filtered and paginated."""
    filters = JobListingFilters(
        status=status_filter,
        job_type=job_type,
        company_id=company_id,
        search=search,
    )
    listings, total = await JobListingService(db).list_listings(
        site.id, filters, offset=pagination.offset, limit=pagination.limit
    )
    return JobListingListResponse(
        job_listings=[JobListingWithCompany.model_validate(listing) for listing in listings],
        pagination=Pagination.create(pagination.page, pagination.limit, total),
    )


@router.post("", response_model=JobListingWithCompany, status_code=status.HTTP_201_CREATED)
async def create_job_listing(
    data: JobListingCreate,
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a listing for an active company of the site."""
    return await JobListingService(db).create(site.id, data)


@router.post("/images", response_model=JobListingImageResponse)
async def upload_job_listing_image(
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    image: Annotated[UploadFile, File()],
):
    data = await image.read()
    url = await MediaService(db).upload_job_listing_image(
        site, image.filename or "image", image.content_type, data
    )
    return JobListingImageResponse(message="Image uploaded successfully", url=url)


@router.delete("/images", response_model=MessageResponse)
async def delete_job_listing_image(
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    url: str | None = None,
):
    """Delete an image uploaded for this site's listings. Other URLs are left alone."""
    if not url:
        raise BadRequestError("Image URL is required")
    await MediaService(db).delete_job_listing_image(site, url)
    return MessageResponse(message="Image deleted successfully")


@router.get("/{job_listing_id}", response_model=JobListingWithCompany)
async def get_job_listing(
    job_listing_id: UUID,
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    listing = await JobListingService(db).get_by_id(site.id, job_listing_id)
    if not listing:
        raise NotFoundError("Job listing")
    return listing


@router.put("/{job_listing_id}", response_model=JobListingWithCompany)
async def update_job_listing(
    job_listing_id: UUID,
    data: JobListingUpdate,
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = JobListingService(db)
    listing = await service.get_by_id(site.id, job_listing_id)
    if not listing:
        raise NotFoundError("Job listing")
    return await service.update(listing, data)


@router.delete("/{job_listing_id}", response_model=MessageResponse)
async def delete_job_listing(
    job_listing_id: UUID,
    site: JobBoardSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = JobListingService(db)
    listing = await service.get_by_id(site.id, job_listing_id)
    if not listing:
        raise NotFoundError("Job listing")
    await service.delete(listing)
    return MessageResponse(message="Job listing deleted successfully")
