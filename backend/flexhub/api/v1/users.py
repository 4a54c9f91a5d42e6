"""
User administration and current-site endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import CurrentUser, SuperAdmin
from flexhub.core.exceptions import ForbiddenError, NotFoundError
from flexhub.database import get_db
from flexhub.schemas.auth import (
    CurrentSite,
    CurrentSiteResponse,
    CurrentSiteUpdate,
    UserUpdate,
    UserWithSites,
)
from flexhub.services.site_service import SiteService
from flexhub.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[UserWithSites])
async def list_users(
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """All users, newest first, with the sites they belong to."""
    return await UserService(db).list_users()


@router.get("/current-site", response_model=CurrentSiteResponse)
async def get_current_site(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if current_user.current_site_id is None:
        return CurrentSiteResponse(current_site=None)

    site = await SiteService(db).get_by_id(current_user.current_site_id)
    return CurrentSiteResponse(
        current_site=CurrentSite.model_validate(site) if site else None
    )


@router.put("/current-site", response_model=CurrentSiteResponse)
async def set_current_site(
    data: CurrentSiteUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Select the site the admin front end works on."""
    site_service = SiteService(db)
    site = await site_service.get_by_id(data.site_id)
    if not site:
        raise NotFoundError("Site")

    if not await site_service.get_for_user(data.site_id, current_user):
        raise ForbiddenError("No access to this site")

    await UserService(db).set_current_site(current_user, site.id)
    return CurrentSiteResponse(current_site=CurrentSite.model_validate(site))


@router.patch("/{user_id}", response_model=UserWithSites)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Change a user's role or deactivate them."""
    user_service = UserService(db)
    user = await user_service.get_by_id(user_id)
    if not user:
        raise NotFoundError("User")

    await user_service.update(user, data)
    return await user_service.get_with_sites(user_id)
