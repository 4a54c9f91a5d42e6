"""
Unit tests for the storage integration.

Tests:
- Filename sanitizing and key layout
- Local filesystem client
- Mapping public URLs back to keys
"""
import uuid

import pytest

from flexhub.integrations.storage import (
    FlexHubStoragePaths,
    LocalStorageClient,
    sanitize_filename,
)


@pytest.fixture
def client(tmp_path):
    return LocalStorageClient(base_path=str(tmp_path), base_url="/files")


class TestSanitizeFilename:

    def test_keeps_safe_characters(self):
        assert sanitize_filename("logo-v2_final.png") == "logo-v2_final.png"

    def test_replaces_spaces_and_symbols(self):
        assert sanitize_filename("Team Photo (1).jpg") == "Team_Photo__1_.jpg"

    def test_strips_directories(self):
        assert sanitize_filename("../../etc/passwd") == "passwd"

    def test_empty_name(self):
        assert sanitize_filename("") == "file"


class TestStoragePaths:

    def test_site_image_key(self):
        site_id = uuid.uuid4()
        key = FlexHubStoragePaths.site_image(site_id, "logo", "My Logo.png")

        assert key.startswith(f"flexhub/sites/{site_id}/logo-")
        assert key.endswith("-My_Logo.png")

    def test_media_key_uses_site_slug_and_folder(self):
        site_id = uuid.uuid4()
        key = FlexHubStoragePaths.media("Test Site", site_id, "a.png", folder="Events/2026")

        assert key.startswith(f"flexhub/sites/test-site-{site_id}/media/events/2026/")
        assert key.endswith("-a.png")

    def test_media_key_defaults_to_root_folder(self):
        key = FlexHubStoragePaths.media("Test Site", "abc", "a.png")

        assert "/media/root/" in key


class TestLocalStorageClient:

    def test_upload_returns_public_url(self, client, tmp_path):
        url = client.upload_bytes("flexhub/a.txt", b"hello")

        assert url == "/files/flexhub/a.txt"
        assert (tmp_path / "flexhub" / "a.txt").read_bytes() == b"hello"
        assert client.exists("flexhub/a.txt")

    def test_delete_missing_object_is_not_an_error(self, client):
        assert client.delete("flexhub/missing.txt") is True

    def test_key_from_url(self, client):
        assert client.key_from_url("/files/flexhub/a.txt") == "flexhub/a.txt"
        assert client.key_from_url("https://cdn.example.com/a.txt") is None
        assert client.key_from_url(None) is None

    def test_delete_url_leaves_foreign_urls_alone(self, client):
        assert client.delete_url("https://cdn.example.com/a.txt") is False

    def test_delete_url_removes_object(self, client):
        url = client.upload_bytes("flexhub/b.txt", b"bye")

        assert client.delete_url(url) is True
        assert not client.exists("flexhub/b.txt")

    def test_key_cannot_escape_root(self, client):
        with pytest.raises(ValueError):
            client.upload_bytes("../outside.txt", b"nope")


class TestSiteMediaKeys:

    def test_listing_image_of_the_site(self):
        site_id = uuid.uuid4()
        key = FlexHubStoragePaths.media("Test Site", site_id, "hero.png", "job-listings")

        assert FlexHubStoragePaths.is_site_media(key, site_id, "job-listings")

    def test_key_survives_a_site_rename(self):
        site_id = uuid.uuid4()
        key = FlexHubStoragePaths.media("Old Name", site_id, "hero.png", "job-listings")

        assert FlexHubStoragePaths.is_site_media(key, site_id, "job-listings")

    def test_other_site_or_folder_is_rejected(self):
        site_id = uuid.uuid4()
        key = FlexHubStoragePaths.media("Test Site", site_id, "hero.png", "job-listings")

        assert not FlexHubStoragePaths.is_site_media(key, uuid.uuid4(), "job-listings")
        assert not FlexHubStoragePaths.is_site_media(key, site_id, "events")
        assert not FlexHubStoragePaths.is_site_media(
            FlexHubStoragePaths.site_image(site_id, "logo", "a.png"), site_id, "job-listings"
        )

    def test_traversal_and_empty_keys_are_rejected(self):
        site_id = uuid.uuid4()
        key = f"flexhub/sites/test-site-{site_id}/media/job-listings/../../other/a.png"

        assert not FlexHubStoragePaths.is_site_media(key, site_id, "job-listings")
        assert not FlexHubStoragePaths.is_site_media(None, site_id, "job-listings")
