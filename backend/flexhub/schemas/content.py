"""
Page and blog post schemas.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from flexhub.schemas.common import BaseSchema, IDSchema, TimestampSchema


class PageCreate(BaseSchema):
    title: str = Field(min_length=1, max_length=500)
    slug: str = Field(min_length=1, max_length=500)
    content: str | None = None
    is_published: bool = False


class PageUpdate(BaseSchema):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    slug: str | None = Field(default=None, min_length=1, max_length=500)
    content: str | None = None
    is_published: bool | None = None


class PageResponse(IDSchema, TimestampSchema):
    site_id: UUID
    title: str
    slug: str
    content: str | None = None
    is_published: bool


class BlogPostCreate(PageCreate):
    excerpt: str | None = None


class BlogPostUpdate(PageUpdate):
    excerpt: str | None = None


class BlogPostResponse(PageResponse):
    excerpt: str | None = None
    published_at: datetime | None = None
