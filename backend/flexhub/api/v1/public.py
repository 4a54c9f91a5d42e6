"""
Unauthenticated endpoints consumed by the sites themselves.

Served to any origin; list responses carry Cache-Control headers.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import Paging, feature_disabled_message
from flexhub.core.exceptions import ForbiddenError, NotFoundError
from flexhub.database import get_db
from flexhub.integrations.youtube import YouTubeClient, get_youtube_client
from flexhub.models.base import utcnow
from flexhub.models.job_board import ExperienceLevel, JobStatus, JobType, RemoteWorkType
from flexhub.models.site import FeatureType, Site
from flexhub.schemas.common import Pagination
from flexhub.schemas.contact import PublicContactResponse, PublicContactSubmit
from flexhub.schemas.job_board import JobBoardFilters, JobListingWithCompany, PublicJobBoardResponse
from flexhub.schemas.public import PublicFeature, PublicSite, PublicSitesResponse
from flexhub.schemas.social import PublicSocialMediaResponse
from flexhub.schemas.sponsor import PublicSponsor
from flexhub.services.contact_service import ContactService, client_ip
from flexhub.services.feature_service import FeatureService
from flexhub.services.job_board_service import JobListingFilters, JobListingService
from flexhub.services.site_service import SiteService
from flexhub.services.social_service import SocialMediaService
from flexhub.services.sponsor_service import SponsorService

router = APIRouter(prefix="/public", tags=["Public"])

SITES_CACHE_CONTROL = "public, max-age=600, stale-while-revalidate=300"
CACHE_CONTROL = "public, max-age=300, stale-while-revalidate=150"


async def get_public_site(db: AsyncSession, site_id: UUID, feature: FeatureType | None = None) -> Site:
    site = await SiteService(db).get_by_id(site_id)
    if not site:
        raise NotFoundError("Site")
    if feature and not await FeatureService(db).is_enabled(site.id, feature):
        raise ForbiddenError(feature_disabled_message(feature))
    return site


@router.get("/sites", response_model=PublicSitesResponse)
async def list_public_sites(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Every site with its enabled features."""
    sites = await SiteService(db).list_all()
    response.headers["Cache-Control"] = SITES_CACHE_CONTROL

    public_sites = [
        PublicSite(
            id=site.id,
            name=site.name,
            description=site.description,
            domain=site.domain,
            logo=site.logo,
            cover_image=site.cover_image,
            created_at=site.created_at,
            updated_at=site.updated_at,
            features=[
                PublicFeature(
                    id=feature.id,
                    type=feature.feature,
                    display_name=feature.display_name,
                    description=feature.description,
                    config=feature.config or {},
                )
                for feature in site.features
                if feature.is_enabled
            ],
        )
        for site in sites
    ]
    return PublicSitesResponse(sites=public_sites, count=len(public_sites), last_updated=utcnow())


@router.post(
    "/sites/{site_id}/contact",
    response_model=PublicContactResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_contact(
    site_id: UUID,
    data: PublicContactSubmit,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record a visitor's contact form submission. Only an active form is required."""
    await get_public_site(db, site_id)
    await ContactService(db).submit(
        site_id,
        data.data,
        ip_address=client_ip(request.headers),
        user_agent=request.headers.get("user-agent") or "unknown",
    )
    return PublicContactResponse(success=True, message="Contact submitted successfully")


@router.get("/sites/{site_id}/sponsors", response_model=list[PublicSponsor])
async def list_public_sponsors(
    site_id: UUID,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await get_public_site(db, site_id, FeatureType.SPONSORS)
    response.headers["Cache-Control"] = CACHE_CONTROL
    return await SponsorService(db).list_for_site(site_id, active_only=True)


@router.get("/sites/{site_id}/job-board", response_model=PublicJobBoardResponse)
async def public_job_board(
    site_id: UUID,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    pagination: Paging,
    search: str | None = None,
    job_type: Annotated[JobType | None, Query(alias="jobType")] = None,
    company_id: Annotated[UUID | None, Query(alias="companyId")] = None,
    location: str | None = None,
    experience_level: Annotated[ExperienceLevel | None, Query(alias="experienceLevel")] = None,
    remote_work_type: Annotated[RemoteWorkType | None, Query(alias="remoteWorkType")] = None,
    salary_min: Annotated[int | None, Query(alias="salaryMin", ge=0)] = None,
    salary_max: Annotated[int | None, Query(alias="salaryMax", ge=0)] = None,
):
    """Active listings of active companies, with the values available for filtering."""
    await get_public_site(db, site_id, FeatureType.JOB_BOARD)

    service = JobListingService(db)
    filters = JobListingFilters(
        status=JobStatus.ACTIVE,
        job_type=job_type,
        company_id=company_id,
        search=search,
        location=location,
        experience_level=experience_level,
        remote_work_type=remote_work_type,
        salary_min=salary_min,
        salary_max=salary_max,
        active_companies_only=True,
    )
    listings, total = await service.list_listings(
        site_id, filters, offset=pagination.offset, limit=pagination.limit
    )
    filter_values = await service.filter_values(site_id)

    response.headers["Cache-Control"] = CACHE_CONTROL
    return PublicJobBoardResponse(
        job_listings=[JobListingWithCompany.model_validate(listing) for listing in listings],
        pagination=Pagination.create(pagination.page, pagination.limit, total),
        filters=JobBoardFilters.model_validate(filter_values),
        last_updated=utcnow(),
    )


@router.get("/sites/{site_id}/social-media", response_model=PublicSocialMediaResponse)
async def public_social_media(
    site_id: UUID,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    youtube: Annotated[YouTubeClient, Depends(get_youtube_client)],
):
    """Active channels with enabled stats, refreshing stale YouTube numbers."""
    await get_public_site(db, site_id, FeatureType.SOCIAL_MEDIA_INTEGRATION)
    channels = await SocialMediaService(db, youtube).public_channels(site_id)

    response.headers["Cache-Control"] = CACHE_CONTROL
    return PublicSocialMediaResponse(channels=channels, count=len(channels), last_updated=utcnow())
