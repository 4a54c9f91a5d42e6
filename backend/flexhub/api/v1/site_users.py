"""
Site membership endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import AccessibleSite, SuperAdmin
from flexhub.core.exceptions import ConflictError, NotFoundError
from flexhub.database import get_db
from flexhub.schemas.auth import UserSummary
from flexhub.schemas.common import MessageResponse
from flexhub.schemas.site import SiteUserAdd
from flexhub.services.site_service import SiteService
from flexhub.services.user_service import UserService

router = APIRouter(prefix="/sites/{site_id}/users", tags=["Site Users"])


@router.get("", response_model=list[UserSummary])
async def list_site_users(
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Members of the site."""
    site = await SiteService(db).get_by_id(site.id, with_details=True)
    return site.users


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_site_user(
    site_id: UUID,
    data: SiteUserAdd,
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Connect a user to the site."""
    site_service = SiteService(db)
    site = await site_service.get_by_id(site_id)
    if not site:
        raise NotFoundError("Site")

    user = await UserService(db).get_by_id(data.user_id)
    if not user:
        raise NotFoundError("User")

    if not await site_service.add_user(site, user):
        raise ConflictError("User is already assigned to this site")

    return MessageResponse(message="User added to site successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
async def remove_site_user(
    site_id: UUID,
    user_id: UUID,
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Disconnect a user from the site."""
    site_service = SiteService(db)
    site = await site_service.get_by_id(site_id)
    if not site:
        raise NotFoundError("Site")

    if not await site_service.remove_user(site, user_id):
        raise NotFoundError(detail="User is not assigned to this site")

    return MessageResponse(message="User removed from site successfully")
