"""
Social media channels linked to a site and the stats shown for them.
"""
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from flexhub.models.base import Base, BaseModel, SiteBaseModel


class SocialMediaPlatform(str, PyEnum):
    YOUTUBE = "YOUTUBE"
    TWITCH = "TWITCH"
    INSTAGRAM = "INSTAGRAM"
    TWITTER = "TWITTER"


class SocialMediaStatType(str, PyEnum):
    YOUTUBE_SUBSCRIBERS = "YOUTUBE_SUBSCRIBERS"
    YOUTUBE_TOTAL_VIEWS = "YOUTUBE_TOTAL_VIEWS"
    YOUTUBE_VIDEO_COUNT = "YOUTUBE_VIDEO_COUNT"
    YOUTUBE_THUMBNAIL = "YOUTUBE_THUMBNAIL"
    YOUTUBE_DESCRIPTION = "YOUTUBE_DESCRIPTION"
    TWITCH_FOLLOWERS = "TWITCH_FOLLOWERS"
    TWITCH_TOTAL_VIEWS = "TWITCH_TOTAL_VIEWS"
    CHANNEL_NAME = "CHANNEL_NAME"
    PLATFORM_URL = "PLATFORM_URL"


# Stats created for a new channel, in display order
PLATFORM_DEFAULT_STATS: dict[str, list[tuple[SocialMediaStatType, str]]] = {
    SocialMediaPlatform.YOUTUBE: [
        (SocialMediaStatType.YOUTUBE_SUBSCRIBERS, "Subscribers"),
        (SocialMediaStatType.YOUTUBE_TOTAL_VIEWS, "Total Views"),
        (SocialMediaStatType.YOUTUBE_VIDEO_COUNT, "Video Count"),
        (SocialMediaStatType.YOUTUBE_THUMBNAIL, "Channel Thumbnail"),
        (SocialMediaStatType.YOUTUBE_DESCRIPTION, "Channel Description"),
        (SocialMediaStatType.CHANNEL_NAME, "Channel Name"),
        (SocialMediaStatType.PLATFORM_URL, "Channel URL"),
    ],
    SocialMediaPlatform.TWITCH: [
        (SocialMediaStatType.TWITCH_FOLLOWERS, "Followers"),
        (SocialMediaStatType.TWITCH_TOTAL_VIEWS, "Total Views"),
        (SocialMediaStatType.CHANNEL_NAME, "Channel Name"),
        (SocialMediaStatType.PLATFORM_URL, "Channel URL"),
    ],
}

DEFAULT_STATS: list[tuple[SocialMediaStatType, str]] = [
    (SocialMediaStatType.CHANNEL_NAME, "Channel Name"),
    (SocialMediaStatType.PLATFORM_URL, "Channel URL"),
]


class SocialMediaChannel(Base, SiteBaseModel):
    __tablename__ = "social_media_channels"
    __table_args__ = (
        UniqueConstraint("site_id", "platform", "channel_id", name="uq_site_platform_channel"),
    )

    platform = Column(Enum(SocialMediaPlatform), nullable=False)
    channel_id = Column(String(255), nullable=False)
    channel_name = Column(String(500), nullable=True)
    channel_url = Column(String(2048), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)

    site = relationship("Site", back_populates="social_media_channels")
    stats = relationship(
        "SocialMediaChannelStat",
        back_populates="channel",
        cascade="all, delete-orphan",
        order_by="SocialMediaChannelStat.display_order",
    )

    def __repr__(self) -> str:
        return f"<SocialMediaChannel {self.platform.value}:{self.channel_id}>"


class SocialMediaChannelStat(Base, BaseModel):
    __tablename__ = "social_media_channel_stats"

    channel_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("social_media_channels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    stat_type = Column(Enum(SocialMediaStatType), nullable=False)
    display_name = Column(String(255), nullable=False)
    value = Column(Text, nullable=True)
    is_enabled = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=True)

    channel = relationship("SocialMediaChannel", back_populates="stats")
