"""
Site management endpoints.
"""
import logging
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import AccessibleSite, AdminUser, CurrentUser, SuperAdmin
from flexhub.core.exceptions import BadRequestError, SiteAccessError
from flexhub.database import get_db
from flexhub.models.site import Site
from flexhub.models.user import User, UserRole
from flexhub.schemas.common import MessageResponse
from flexhub.schemas.site import (
    SiteCounts,
    SiteCreate,
    SiteDetailResponse,
    SiteImageResponse,
    SiteUpdate,
)
from flexhub.services.media_service import MediaService
from flexhub.services.site_service import SITE_IMAGE_COLUMNS, SiteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sites", tags=["Sites"])

ImageType = Literal["logo", "coverImage"]


def site_detail(site: Site, viewer: User) -> SiteDetailResponse:
    """Serialize a site with details loaded. Plain users only see themselves among members."""
    users = site.users
    if viewer.role == UserRole.USER:
        users = [member for member in users if member.id == viewer.id]

    detail = SiteDetailResponse.model_validate(
        {
            "id": site.id,
            "name": site.name,
            "description": site.description,
            "domain": site.domain,
            "logo": site.logo,
            "cover_image": site.cover_image,
            "created_at": site.created_at,
            "updated_at": site.updated_at,
            "users": users,
            "pages": site.pages,
            "blog_posts": site.blog_posts,
            "media_files": site.media_files,
            "features": site.features,
            "count": SiteCounts(
                pages=len(site.pages),
                blog_posts=len(site.blog_posts),
                media_files=len(site.media_files),
                users=len(site.users),
            ),
        }
    )
    return detail


@router.get("", response_model=list[SiteDetailResponse])
async def list_sites(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List the sites visible to the current user, newest first."""
    sites = await SiteService(db).list_for_user(current_user)
    return [site_detail(site, current_user) for site in sites]


@router.post("", response_model=SiteDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_site(
    data: SiteCreate,
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a new site. The creator becomes a member."""
    site = await SiteService(db).create(data, current_user)
    logger.info(f"Site {site.name} created by {current_user.email}")
    return site_detail(site, current_user)


@router.get("/{site_id}", response_model=SiteDetailResponse)
async def get_site(
    site_id: UUID,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a site by ID."""
    site = await SiteService(db).get_for_user(site_id, current_user, with_details=True)
    if not site:
        raise SiteAccessError()
    return site_detail(site, current_user)


@router.put("/{site_id}", response_model=SiteDetailResponse)
async def update_site(
    site_id: UUID,
    data: SiteUpdate,
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a site."""
    service = SiteService(db)
    site = await service.get_by_id(site_id)
    if not site:
        raise SiteAccessError()

    site = await service.update(site, data)
    return site_detail(site, current_user)


@router.delete("/{site_id}", response_model=MessageResponse)
async def delete_site(
    site_id: UUID,
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a site and everything it owns."""
    service = SiteService(db)
    site = await service.get_by_id(site_id)
    if not site:
        raise SiteAccessError()

    await service.delete(site)
    logger.info(f"Site {site_id} deleted by {current_user.email}")
    return MessageResponse(message="Site deleted successfully")


@router.post("/{site_id}/images", response_model=SiteImageResponse)
async def upload_site_image(
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    image: Annotated[UploadFile, File()],
    image_type: Annotated[str, Form(alias="imageType")],
):
    """Upload the site's logo or cover image, replacing the previous one."""
    if image_type not in SITE_IMAGE_COLUMNS:
        raise BadRequestError("Invalid image type")

    media_service = MediaService(db)
    data = await image.read()
    url = await media_service.upload_site_image(
        site, image_type, image.filename or "image", image.content_type, data
    )

    try:
        previous = await SiteService(db).set_image(site, image_type, url)
        await db.commit()
    except Exception:
        await media_service.delete_url(url)
        raise

    # The old blob goes only once the new URL is committed
    if previous and previous != url:
        await media_service.delete_url(previous)

    return SiteImageResponse(message="Image uploaded successfully", url=url)


@router.delete("/{site_id}/images/{image_type}", response_model=MessageResponse)
async def remove_site_image(
    site: AccessibleSite,
    image_type: ImageType,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Remove the site's logo or cover image. Removing an absent image succeeds."""
    previous = await SiteService(db).set_image(site, image_type, None)
    await db.commit()
    if previous:
        await MediaService(db).delete_url(previous)

    return MessageResponse(message="Image removed successfully")
