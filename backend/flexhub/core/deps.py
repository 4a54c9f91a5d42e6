"""
FastAPI dependencies for authentication, site access and feature flags.
"""
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.exceptions import ForbiddenError, SiteAccessError, UnauthorizedError
from flexhub.core.security import decode_token
from flexhub.database import get_db
from flexhub.models.site import FEATURE_DEFINITIONS, FeatureType, Site
from flexhub.models.user import User, UserRole
from flexhub.schemas.common import PaginationParams
from flexhub.services.feature_service import FeatureService
from flexhub.services.site_service import SiteService

# auto_error=False so a missing header is a 401, not the library's default
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Resolve the bearer token to a User row by email."""
    if credentials is None:
        raise UnauthorizedError()

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError("Could not validate credentials")

    email: str | None = payload.get("email")
    if email is None:
        raise UnauthorizedError("Could not validate credentials")

    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if user is None:
        raise UnauthorizedError("User not found")

    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Ensure the current user is active."""
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
        )
    return current_user


def require_roles(*roles: UserRole):
    """Dependency factory for role checking."""

    async def role_checker(
        current_user: Annotated[User, Depends(get_current_active_user)],
    ) -> User:
        if current_user.role not in roles:
            raise ForbiddenError(
                f"Role required: {', '.join(r.value for r in roles)}"
            )
        return current_user

    return role_checker


# Common dependencies
CurrentUser = Annotated[User, Depends(get_current_active_user)]
SuperAdmin = Annotated[User, Depends(require_roles(UserRole.SUPERADMIN))]
AdminUser = Annotated[User, Depends(require_roles(UserRole.SUPERADMIN, UserRole.ADMIN))]


async def get_accessible_site(
    site_id: UUID,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Site:
    """The site from the path, if the caller is a member or a super admin."""
    site = await SiteService(db).get_for_user(site_id, current_user)
    if site is None:
        raise SiteAccessError()
    return site


AccessibleSite = Annotated[Site, Depends(get_accessible_site)]


def feature_disabled_message(feature: FeatureType) -> str:
    return f"{FEATURE_DEFINITIONS[feature]['display_name']} feature is not enabled for this site"


def require_feature(feature: FeatureType):
    """Dependency factory: accessible site with `feature` enabled, else 403.

    The flag is read on every request so toggling it takes effect at once.
    """

    async def feature_checker(
        site: AccessibleSite,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> Site:
        if not await FeatureService(db).is_enabled(site.id, feature):
            raise ForbiddenError(feature_disabled_message(feature))
        return site

    return feature_checker


JobBoardSite = Annotated[Site, Depends(require_feature(FeatureType.JOB_BOARD))]
SponsorsSite = Annotated[Site, Depends(require_feature(FeatureType.SPONSORS))]
SocialMediaSite = Annotated[Site, Depends(require_feature(FeatureType.SOCIAL_MEDIA_INTEGRATION))]
ContactSite = Annotated[Site, Depends(require_feature(FeatureType.CONTACT_MANAGEMENT))]


def get_pagination(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> PaginationParams:
    return PaginationParams(page=page, limit=limit)


Paging = Annotated[PaginationParams, Depends(get_pagination)]
