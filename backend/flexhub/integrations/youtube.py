"""
YouTube Data API v3 client.

Fetches channel statistics for the social media widgets. Every call is a
single request with a timeout; failures are logged and reported as None or
an empty list.
"""
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from flexhub.config import settings

logger = logging.getLogger(__name__)


@dataclass
class ChannelStats:
    channel_id: str
    channel_name: str
    subscriber_count: str
    total_views: str
    video_count: str
    thumbnail_url: str
    channel_url: str
    custom_url: str | None = None
    description: str | None = None
    published_at: str | None = None


@dataclass
class VideoStats:
    video_id: str
    title: str
    description: str
    published_at: str
    thumbnail_url: str
    view_count: str
    like_count: str
    comment_count: str
    duration: str


class YouTubeClient:
    """HTTP client for the YouTube Data API."""

    BASE_URL = "https://www.googleapis.com/youtube/v3"

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        self.api_key = api_key if api_key is not None else settings.YOUTUBE_API_KEY
        self.timeout = timeout or settings.YOUTUBE_TIMEOUT

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.BASE_URL}/{path}",
                params={**params, "key": self.api_key},
            )
            response.raise_for_status()
            return response.json()

    async def get_channel_stats(self, channel_id: str) -> ChannelStats | None:
        """Snippet and statistics of a channel, or None when unavailable."""
        if not self.api_key:
            logger.warning("YouTube API key not configured")
            return None

        try:
            data = await self._get(
                "channels",
                {"part": "snippet,statistics", "id": channel_id},
            )
        except httpx.TimeoutException:
            logger.error(f"[YouTube] Timeout fetching channel {channel_id}")
            return None
        except httpx.HTTPStatusError as e:
            logger.error(f"[YouTube] HTTP {e.response.status_code} fetching channel {channel_id}")
            return None
        except Exception as e:
            logger.error(f"[YouTube] Unexpected error fetching channel {channel_id}: {e}")
            return None

        items = data.get("items") or []
        if not items:
            return None

        channel = items[0]
        resolved_id = channel.get("id")
        if not resolved_id:
            logger.error(f"[YouTube] Malformed channel item for {channel_id}")
            return None
        snippet = channel.get("snippet", {})
        statistics = channel.get("statistics", {})
        thumbnails = snippet.get("thumbnails") or {}

        return ChannelStats(
            channel_id=resolved_id,
            channel_name=snippet.get("title", ""),
            subscriber_count=statistics.get("subscriberCount") or "0",
            total_views=statistics.get("viewCount") or "0",
            video_count=statistics.get("videoCount") or "0",
            thumbnail_url=(thumbnails.get("default") or {}).get("url", ""),
            channel_url=f"https://www.youtube.com/channel/{resolved_id}",
            custom_url=snippet.get("customUrl"),
            description=snippet.get("description"),
            published_at=snippet.get("publishedAt"),
        )

    async def get_recent_videos(self, channel_id: str, max_results: int = 5) -> list[VideoStats]:
        """Latest uploads of a channel with their statistics."""
        try:
            channel_data = await self._get(
                "channels",
                {"part": "contentDetails", "id": channel_id},
            )
            items = channel_data.get("items") or []
            if not items:
                return []
            uploads = items[0]["contentDetails"]["relatedPlaylists"]["uploads"]

            playlist_data = await self._get(
                "playlistItems",
                {"part": "snippet", "playlistId": uploads, "maxResults": max_results},
            )
            video_ids = [
                item["snippet"]["resourceId"]["videoId"]
                for item in playlist_data.get("items") or []
            ]
            if not video_ids:
                return []

            videos_data = await self._get(
                "videos",
                {"part": "snippet,statistics,contentDetails", "id": ",".join(video_ids)},
            )
        except Exception as e:
            logger.error(f"[YouTube] Error fetching recent videos for {channel_id}: {e}")
            return []

        videos = []
        for video in videos_data.get("items") or []:
            snippet = video.get("snippet", {})
            statistics = video.get("statistics", {})
            videos.append(
                VideoStats(
                    video_id=video["id"],
                    title=snippet.get("title", ""),
                    description=snippet.get("description", ""),
                    published_at=snippet.get("publishedAt", ""),
                    thumbnail_url=((snippet.get("thumbnails") or {}).get("default") or {}).get("url", ""),
                    view_count=statistics.get("viewCount") or "0",
                    like_count=statistics.get("likeCount") or "0",
                    comment_count=statistics.get("commentCount") or "0",
                    duration=video.get("contentDetails", {}).get("duration", ""),
                )
            )
        return videos

    async def get_channel_id_from_url(self, channel_url: str) -> str | None:
        """
        Resolve a channel URL to its channel id.

        /channel/<id> URLs carry the id; /c/<name>, /user/<name> and
        /@handle URLs are resolved through the search endpoint.
        """
        if "/channel/" in channel_url:
            return channel_url.split("/channel/")[1].split("?")[0].strip("/") or None

        name = None
        for marker in ("/c/", "/user/", "/@"):
            if marker in channel_url:
                name = channel_url.split(marker)[1].split("?")[0].strip("/")
                break
        if not name:
            return None

        try:
            data = await self._get(
                "search",
                {"part": "snippet", "q": name, "type": "channel", "maxResults": 1},
            )
        except Exception as e:
            logger.error(f"[YouTube] Error resolving channel URL {channel_url}: {e}")
            return None

        items = data.get("items") or []
        if not items:
            return None
        return items[0].get("id", {}).get("channelId")

    async def validate_channel_id(self, channel_id: str) -> bool:
        return await self.get_channel_stats(channel_id) is not None


def get_youtube_client() -> YouTubeClient:
    """Client built from the current settings."""
    return YouTubeClient()
