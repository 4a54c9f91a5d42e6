"""
Social media channel service.

Channels are linked accounts on a platform; each carries the stats a site
chooses to show publicly. YouTube stats are pre-filled when the channel is
added and refreshed lazily by the public endpoint.
"""
import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from flexhub.config import settings
from flexhub.core.exceptions import BadRequestError, ConflictError
from flexhub.integrations.youtube import ChannelStats, YouTubeClient
from flexhub.models.base import as_utc, utcnow
from flexhub.models.social import (
    DEFAULT_STATS,
    PLATFORM_DEFAULT_STATS,
    SocialMediaChannel,
    SocialMediaChannelStat,
    SocialMediaPlatform,
    SocialMediaStatType,
)
from flexhub.schemas.social import ChannelCreate, ChannelUpdate, PublicChannel, PublicStat

logger = logging.getLogger(__name__)

COUNT_STATS = {
    SocialMediaStatType.YOUTUBE_SUBSCRIBERS: "subscriber_count",
    SocialMediaStatType.YOUTUBE_TOTAL_VIEWS: "total_views",
    SocialMediaStatType.YOUTUBE_VIDEO_COUNT: "video_count",
}


def format_number(value: int) -> str:
    """Compact display form: 1500000 -> 1.5M, 12345 -> 12.3K."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(value)


def youtube_stat_value(stat_type: SocialMediaStatType, stats: ChannelStats) -> str | None:
    """Display value of one stat taken from a YouTube API response."""
    if stat_type in COUNT_STATS:
        raw = getattr(stats, COUNT_STATS[stat_type])
        try:
            return format_number(int(raw))
        except (TypeError, ValueError):
            return raw
    if stat_type == SocialMediaStatType.YOUTUBE_THUMBNAIL:
        return stats.thumbnail_url
    if stat_type == SocialMediaStatType.YOUTUBE_DESCRIPTION:
        return stats.description or ""
    if stat_type == SocialMediaStatType.CHANNEL_NAME:
        return stats.channel_name
    if stat_type == SocialMediaStatType.PLATFORM_URL:
        return stats.channel_url
    return None


class SocialMediaService:
    """Service for social media channels and their stats."""

    def __init__(self, db: AsyncSession, youtube: YouTubeClient | None = None):
        self.db = db
        self.youtube = youtube or YouTubeClient()

    async def list_channels(self, site_id: UUID) -> list[SocialMediaChannel]:
        result = await self.db.execute(
            select(SocialMediaChannel)
            .options(selectinload(SocialMediaChannel.stats))
            .where(SocialMediaChannel.site_id == site_id)
            .order_by(SocialMediaChannel.display_order.asc(), SocialMediaChannel.created_at.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_channel(self, site_id: UUID, channel_id: UUID) -> SocialMediaChannel | None:
        result = await self.db.execute(
            select(SocialMediaChannel)
            .options(selectinload(SocialMediaChannel.stats))
            .where(
                SocialMediaChannel.id == channel_id,
                SocialMediaChannel.site_id == site_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_channel(self, site_id: UUID, data: ChannelCreate) -> SocialMediaChannel:
        """
        Link a channel to a site and create its default stats.

        YouTube channels are validated against the API before anything is
        written; the channel name and URL come from the response. Other
        platforms keep the name and URL sent by the caller.
        """
        youtube_stats = None
        channel_name = data.channel_name
        channel_url = data.channel_url

        if data.platform == SocialMediaPlatform.YOUTUBE:
            youtube_stats = await self.youtube.get_channel_stats(data.channel_id)
            if youtube_stats is None:
                raise BadRequestError("Invalid YouTube channel ID or channel not accessible")
            channel_name = youtube_stats.channel_name
            channel_url = youtube_stats.channel_url

        existing = await self.db.execute(
            select(SocialMediaChannel.id).where(
                SocialMediaChannel.site_id == site_id,
                SocialMediaChannel.platform == data.platform,
                SocialMediaChannel.channel_id == data.channel_id,
            )
        )
        if existing.first():
            raise ConflictError("This channel is already added to this site")

        defaults = PLATFORM_DEFAULT_STATS.get(data.platform, DEFAULT_STATS)
        if data.enabled_stats:
            defaults = [d for d in defaults if d[0] in data.enabled_stats]

        now = utcnow()
        channel = SocialMediaChannel(
            site_id=site_id,
            platform=data.platform,
            channel_id=data.channel_id,
            channel_name=channel_name,
            channel_url=channel_url,
            is_active=True,
            display_order=0,
        )
        channel.stats = [
            SocialMediaChannelStat(
                stat_type=stat_type,
                display_name=display_name,
                is_enabled=True,
                display_order=index,
                value=youtube_stat_value(stat_type, youtube_stats) if youtube_stats else None,
                last_updated=now if youtube_stats else None,
            )
            for index, (stat_type, display_name) in enumerate(defaults)
        ]
        self.db.add(channel)
        await self.db.flush()
        logger.info(f"Linked {data.platform.value} channel {data.channel_id} to site {site_id}")
        return await self.get_channel(site_id, channel.id)

    async def update_channel(self, channel: SocialMediaChannel, data: ChannelUpdate) -> SocialMediaChannel:
        if data.is_active is not None:
            channel.is_active = data.is_active
        if data.display_order is not None:
            channel.display_order = data.display_order

        if data.stats:
            stats_by_id = {stat.id: stat for stat in channel.stats}
            for change in data.stats:
                stat = stats_by_id.get(change.id)
                if stat is None:
                    raise BadRequestError(f"Stat {change.id} does not belong to this channel")
                for field, value in change.model_dump(exclude={"id"}, exclude_none=True).items():
                    setattr(stat, field, value)

        await self.db.flush()
        return await self.get_channel(channel.site_id, channel.id)

    async def delete_channel(self, channel: SocialMediaChannel) -> None:
        await self.db.delete(channel)
        await self.db.flush()

    async def public_channels(self, site_id: UUID) -> list[PublicChannel]:
        """
        Active channels with their enabled stats, refreshing stale YouTube values.

        A stat is stale when it was never fetched or is older than
        SOCIAL_STATS_REFRESH_MINUTES. The API is called at most once per
        channel; when it fails the stored values are served unchanged.
        """
        result = await self.db.execute(
            select(SocialMediaChannel)
            .options(selectinload(SocialMediaChannel.stats))
            .where(
                SocialMediaChannel.site_id == site_id,
                SocialMediaChannel.is_active.is_(True),
            )
            .order_by(SocialMediaChannel.display_order.asc(), SocialMediaChannel.created_at.asc())
        )
        channels = list(result.scalars().all())

        now = utcnow()
        cutoff = now - timedelta(minutes=settings.SOCIAL_STATS_REFRESH_MINUTES)
        public = []

        for channel in channels:
            stats = [stat for stat in channel.stats if stat.is_enabled]
            stale = [
                stat for stat in stats
                if stat.last_updated is None or as_utc(stat.last_updated) < cutoff
            ]

            if stale and channel.platform == SocialMediaPlatform.YOUTUBE:
                fresh = await self.youtube.get_channel_stats(channel.channel_id)
                if fresh is None:
                    logger.warning(f"Serving cached stats for channel {channel.id}")
                else:
                    for stat in stale:
                        value = youtube_stat_value(stat.stat_type, fresh)
                        if value is not None:
                            stat.value = value
                        stat.last_updated = now

            public.append(
                PublicChannel(
                    id=channel.id,
                    platform=channel.platform,
                    channel_id=channel.channel_id,
                    channel_name=channel.channel_name,
                    channel_url=channel.channel_url,
                    stats=[
                        PublicStat(
                            type=stat.stat_type,
                            display_name=stat.display_name,
                            value=stat.value,
                            last_updated=as_utc(stat.last_updated),
                        )
                        for stat in stats
                    ],
                )
            )

        await self.db.flush()
        return public
