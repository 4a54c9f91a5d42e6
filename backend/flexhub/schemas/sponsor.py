"""
Sponsor schemas.
"""
from uuid import UUID

from pydantic import Field

from flexhub.schemas.common import BaseSchema, IDSchema, TimestampSchema


class SponsorCreate(BaseSchema):
    name: str = Field(min_length=1, max_length=255)
    url: str | None = None
    logo: str | None = None
    active: bool = True


class SponsorUpdate(BaseSchema):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    url: str | None = None
    logo: str | None = None
    active: bool | None = None


class SponsorResponse(IDSchema, TimestampSchema):
    site_id: UUID
    name: str
    url: str | None = None
    logo: str | None = None
    active: bool


class PublicSponsor(IDSchema):
    name: str
    url: str | None = None
    logo: str | None = None
