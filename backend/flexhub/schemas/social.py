"""
Social media channel schemas.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from flexhub.models.social import SocialMediaPlatform, SocialMediaStatType
from flexhub.schemas.common import BaseSchema, IDSchema, TimestampSchema


class ChannelCreate(BaseSchema):
    platform: SocialMediaPlatform
    channel_id: str = Field(min_length=1, max_length=255)
    # Taken from the API for YouTube, stored as given for other platforms
    channel_name: str | None = Field(default=None, max_length=500)
    channel_url: str | None = Field(default=None, max_length=2048)
    # Subset of the platform's default stats to create; all of them when omitted
    enabled_stats: list[SocialMediaStatType] | None = None


class StatUpdate(BaseSchema):
    id: UUID
    is_enabled: bool | None = None
    display_name: str | None = Field(default=None, min_length=1, max_length=255)
    display_order: int | None = None


class ChannelUpdate(BaseSchema):
    is_active: bool | None = None
    display_order: int | None = None
    stats: list[StatUpdate] | None = None


class ChannelStatResponse(IDSchema):
    stat_type: SocialMediaStatType
    display_name: str
    value: str | None = None
    is_enabled: bool
    display_order: int
    last_updated: datetime | None = None


class ChannelResponse(IDSchema, TimestampSchema):
    site_id: UUID
    platform: SocialMediaPlatform
    channel_id: str
    channel_name: str | None = None
    channel_url: str | None = None
    is_active: bool
    display_order: int
    stats: list[ChannelStatResponse] = []


class PublicStat(BaseSchema):
    type: SocialMediaStatType
    display_name: str
    value: str | None = None
    last_updated: datetime | None = None


class PublicChannel(IDSchema):
    platform: SocialMediaPlatform
    channel_id: str
    channel_name: str | None = None
    channel_url: str | None = None
    stats: list[PublicStat] = []


class PublicSocialMediaResponse(BaseSchema):
    channels: list[PublicChannel]
    count: int
    last_updated: datetime
