"""
Unit tests for social media stat formatting.
"""
import pytest

from flexhub.integrations.youtube import ChannelStats
from flexhub.models.social import SocialMediaStatType
from flexhub.services.social_service import format_number, youtube_stat_value


@pytest.fixture
def channel_stats():
    return ChannelStats(
        channel_id="UC123",
        channel_name="Test Channel",
        subscriber_count="1500000",
        total_views="12345",
        video_count="42",
        thumbnail_url="https://yt.example.com/thumb.jpg",
        channel_url="https://www.youtube.com/channel/UC123",
        description=None,
    )


class TestFormatNumber:

    @pytest.mark.parametrize("value,expected", [
        (0, "0"),
        (999, "999"),
        (1000, "1.0K"),
        (12345, "12.3K"),
        (999999, "1000.0K"),
        (1000000, "1.0M"),
        (1500000, "1.5M"),
        (23456789, "23.5M"),
    ])
    def test_compact_form(self, value, expected):
        assert format_number(value) == expected


class TestYouTubeStatValue:

    def test_counts_are_formatted(self, channel_stats):
        assert youtube_stat_value(SocialMediaStatType.YOUTUBE_SUBSCRIBERS, channel_stats) == "1.5M"
        assert youtube_stat_value(SocialMediaStatType.YOUTUBE_TOTAL_VIEWS, channel_stats) == "12.3K"
        assert youtube_stat_value(SocialMediaStatType.YOUTUBE_VIDEO_COUNT, channel_stats) == "42"

    def test_non_numeric_count_is_kept(self, channel_stats):
        channel_stats.subscriber_count = "hidden"
        assert youtube_stat_value(SocialMediaStatType.YOUTUBE_SUBSCRIBERS, channel_stats) == "hidden"

    def test_text_stats(self, channel_stats):
        assert youtube_stat_value(SocialMediaStatType.CHANNEL_NAME, channel_stats) == "Test Channel"
        assert youtube_stat_value(SocialMediaStatType.PLATFORM_URL, channel_stats) == channel_stats.channel_url
        assert youtube_stat_value(SocialMediaStatType.YOUTUBE_THUMBNAIL, channel_stats) == channel_stats.thumbnail_url

    def test_missing_description_is_empty(self, channel_stats):
        assert youtube_stat_value(SocialMediaStatType.YOUTUBE_DESCRIPTION, channel_stats) == ""

    def test_other_platform_stats_have_no_value(self, channel_stats):
        assert youtube_stat_value(SocialMediaStatType.TWITCH_FOLLOWERS, channel_stats) is None
