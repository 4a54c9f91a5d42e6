"""
Site, site feature and site membership schemas.
"""
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from flexhub.models.site import FeatureType
from flexhub.schemas.auth import UserSummary
from flexhub.schemas.common import BaseSchema, IDSchema, TimestampSchema


def _strip_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class SiteCreate(BaseSchema):
    """Create site request."""

    name: str = Field(max_length=255)
    description: str | None = None
    domain: str | None = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Site name is required")
        return value

    @field_validator("description", "domain")
    @classmethod
    def strip_optional(cls, value: str | None) -> str | None:
        return _strip_optional(value)


class SiteUpdate(SiteCreate):
    """Update site request. Same rules as creation."""


class SiteFeatureResponse(IDSchema, TimestampSchema):
    feature: FeatureType
    display_name: str
    description: str | None = None
    is_enabled: bool
    config: dict[str, Any] = {}


class PageSummary(IDSchema):
    title: str
    slug: str
    is_published: bool
    created_at: datetime


class BlogPostSummary(PageSummary):
    published_at: datetime | None = None


class MediaFileSummary(IDSchema):
    filename: str
    original_name: str
    mime_type: str
    size: int
    url: str
    created_at: datetime


class SiteCounts(BaseSchema):
    pages: int
    blog_posts: int
    media_files: int
    users: int


class SiteResponse(IDSchema, TimestampSchema):
    """Site response."""

    name: str
    description: str | None = None
    domain: str | None = None
    logo: str | None = None
    cover_image: str | None = None


class SiteDetailResponse(SiteResponse):
    """Site with its members, content summaries, features and counts."""

    users: list[UserSummary] = []
    pages: list[PageSummary] = []
    blog_posts: list[BlogPostSummary] = []
    media_files: list[MediaFileSummary] = []
    features: list[SiteFeatureResponse] = []
    count: SiteCounts


class SiteFeatureCreate(BaseSchema):
    feature: FeatureType
    is_enabled: bool = True
    config: dict[str, Any] = {}


class SiteFeatureUpdate(BaseSchema):
    is_enabled: bool | None = None
    config: dict[str, Any] | None = None
    display_name: str | None = None
    description: str | None = None


class FeatureDefinition(BaseSchema):
    value: FeatureType
    label: str
    description: str


class FeatureDefinitionsResponse(BaseSchema):
    features: list[FeatureDefinition]


class SiteUserAdd(BaseSchema):
    user_id: UUID


class SiteImageResponse(BaseSchema):
    message: str
    url: str
