"""
Schemas of the unauthenticated public API.
"""
from datetime import datetime
from typing import Any

from flexhub.models.site import FeatureType
from flexhub.schemas.common import BaseSchema, IDSchema, TimestampSchema


class PublicFeature(IDSchema):
    type: FeatureType
    display_name: str
    description: str | None = None
    config: dict[str, Any] = {}


class PublicSite(IDSchema, TimestampSchema):
    name: str
    description: str | None = None
    domain: str | None = None
    logo: str | None = None
    cover_image: str | None = None
    features: list[PublicFeature] = []


class PublicSitesResponse(BaseSchema):
    sites: list[PublicSite]
    count: int
    last_updated: datetime
