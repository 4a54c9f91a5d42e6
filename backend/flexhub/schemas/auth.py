"""
Authentication and user schemas.
"""
from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from flexhub.models.user import UserRole
from flexhub.schemas.common import BaseSchema, IDSchema, SiteRef, TimestampSchema


class SignInRequest(BaseSchema):
    """Identity verified by the OAuth provider front end."""

    email: EmailStr
    name: str | None = None
    image: str | None = None


class LoginRequest(BaseSchema):
    """Login request for accounts with a local password."""

    email: EmailStr
    password: str = Field(min_length=8)


class TokenResponse(BaseSchema):
    access_token: str
    token_type: str = "bearer"


class UserSummary(IDSchema):
    name: str | None = None
    email: str
    role: UserRole
    image: str | None = None


class UserResponse(IDSchema, TimestampSchema):
    """User response schema."""

    email: str
    name: str | None = None
    image: str | None = None
    role: UserRole
    is_active: bool
    is_invited: bool
    last_login: datetime | None = None
    current_site_id: UUID | None = None


class UserWithSites(UserResponse):
    sites: list[SiteRef] = []


class AuthResponse(TokenResponse):
    """Authentication response with user info."""

    user: UserResponse


class UserUpdate(BaseSchema):
    role: UserRole | None = None
    is_active: bool | None = None


class CurrentSiteUpdate(BaseSchema):
    site_id: UUID


class CurrentSite(IDSchema):
    name: str
    description: str | None = None
    domain: str | None = None


class CurrentSiteResponse(BaseSchema):
    current_site: CurrentSite | None = None
