"""
Pydantic schemas for the FlexHub API.
"""
from flexhub.schemas.common import (
    BaseSchema,
    IDSchema,
    TimestampSchema,
    PaginationParams,
    Pagination,
    SiteRef,
    MessageResponse,
)
from flexhub.schemas.auth import (
    SignInRequest,
    LoginRequest,
    TokenResponse,
    UserSummary,
    UserResponse,
    UserWithSites,
    AuthResponse,
)
from flexhub.schemas.site import (
    SiteCreate,
    SiteUpdate,
    SiteResponse,
    SiteDetailResponse,
    SiteFeatureResponse,
)

__all__ = [
    "BaseSchema",
    "IDSchema",
    "TimestampSchema",
    "PaginationParams",
    "Pagination",
    "SiteRef",
    "MessageResponse",
    "SignInRequest",
    "LoginRequest",
    "TokenResponse",
    "UserSummary",
    "UserResponse",
    "UserWithSites",
    "AuthResponse",
    "SiteCreate",
    "SiteUpdate",
    "SiteResponse",
    "SiteDetailResponse",
    "SiteFeatureResponse",
]
