"""
External service integrations for FlexHub.

- storage: local filesystem or DigitalOcean Spaces blobs
- youtube: YouTube Data API for social media stats
"""

from flexhub.integrations.storage import (
    BaseStorageClient,
    FlexHubStoragePaths,
    LocalStorageClient,
    SpacesStorageClient,
    get_storage_client,
)
from flexhub.integrations.youtube import ChannelStats, YouTubeClient, get_youtube_client

__all__ = [
    "BaseStorageClient",
    "FlexHubStoragePaths",
    "LocalStorageClient",
    "SpacesStorageClient",
    "get_storage_client",
    "ChannelStats",
    "YouTubeClient",
    "get_youtube_client",
]
