"""
Unit tests for the YouTube Data API client.
"""
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from flexhub.integrations.youtube import YouTubeClient

CHANNEL_RESPONSE = {
    "items": [
        {
            "id": "UC123",
            "snippet": {
                "title": "Test Channel",
                "description": "About us",
                "customUrl": "@test",
                "thumbnails": {"default": {"url": "https://yt.example.com/t.jpg"}},
            },
            "statistics": {"subscriberCount": "1500000", "viewCount": "12345", "videoCount": "42"},
        }
    ]
}


@pytest.fixture
def client():
    return YouTubeClient(api_key="test-key", timeout=1)


class TestChannelStats:

    @pytest.mark.asyncio
    async def test_parses_channel(self, client):
        with patch.object(client, "_get", AsyncMock(return_value=CHANNEL_RESPONSE)) as get:
            stats = await client.get_channel_stats("UC123")

        get.assert_awaited_once_with("channels", {"part": "snippet,statistics", "id": "UC123"})
        assert stats.channel_name == "Test Channel"
        assert stats.subscriber_count == "1500000"
        assert stats.thumbnail_url == "https://yt.example.com/t.jpg"
        assert stats.channel_url == "https://www.youtube.com/channel/UC123"
        assert stats.custom_url == "@test"

    @pytest.mark.asyncio
    async def test_unknown_channel(self, client):
        with patch.object(client, "_get", AsyncMock(return_value={"items": []})):
            assert await client.get_channel_stats("UC-missing") is None
            assert await client.validate_channel_id("UC-missing") is False

    @pytest.mark.asyncio
    async def test_item_without_id_returns_none(self, client):
        with patch.object(client, "_get", AsyncMock(return_value={"items": [{"snippet": {"title": "x"}}]})):
            assert await client.get_channel_stats("UC123") is None

    @pytest.mark.asyncio
    async def test_http_error_returns_none(self, client):
        request = httpx.Request("GET", "https://www.googleapis.com/youtube/v3/channels")
        error = httpx.HTTPStatusError("forbidden", request=request, response=httpx.Response(403, request=request))

        with patch.object(client, "_get", AsyncMock(side_effect=error)):
            assert await client.get_channel_stats("UC123") is None

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self, client):
        with patch.object(client, "_get", AsyncMock(side_effect=httpx.ReadTimeout("slow"))):
            assert await client.get_channel_stats("UC123") is None

    @pytest.mark.asyncio
    async def test_without_api_key_no_request_is_made(self):
        client = YouTubeClient(api_key="")

        with patch.object(client, "_get", AsyncMock()) as get:
            assert await client.get_channel_stats("UC123") is None

        get.assert_not_awaited()


class TestChannelIdFromUrl:

    @pytest.mark.asyncio
    async def test_channel_url_carries_the_id(self, client):
        with patch.object(client, "_get", AsyncMock()) as get:
            channel_id = await client.get_channel_id_from_url("https://www.youtube.com/channel/UC123?view=0")

        assert channel_id == "UC123"
        get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_handle_is_resolved_by_search(self, client):
        search = {"items": [{"id": {"channelId": "UC999"}}]}

        with patch.object(client, "_get", AsyncMock(return_value=search)) as get:
            channel_id = await client.get_channel_id_from_url("https://www.youtube.com/@creator")

        assert channel_id == "UC999"
        assert get.await_args.args[1]["q"] == "creator"

    @pytest.mark.asyncio
    async def test_unrecognised_url(self, client):
        assert await client.get_channel_id_from_url("https://example.com/about") is None
