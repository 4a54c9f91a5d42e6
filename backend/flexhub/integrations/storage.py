"""
Storage Integration Client

Supports two storage backends:
- local: Local filesystem, served by the app under LOCAL_STORAGE_BASE_URL
- spaces: DigitalOcean Spaces (S3-compatible), public-read objects

Objects are addressed by key; public URLs are the backend's base URL
followed by the key, so a stored URL can be mapped back to its key.
"""

import io
import logging
import mimetypes
import re
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
from uuid import UUID

from minio import Minio
from minio.error import S3Error

from flexhub.config import settings

logger = logging.getLogger(__name__)


class BaseStorageClient(ABC):
    """Abstract base class for storage clients."""

    base_url: str

    @abstractmethod
    def upload_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        """Store bytes under key and return the public URL."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove the object. A missing object is not an error."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        pass

    def get_public_url(self, key: str) -> str:
        return f"{self.base_url.rstrip('/')}/{key}"

    def is_storage_url(self, url: str | None) -> bool:
        return bool(url) and url.startswith(f"{self.base_url.rstrip('/')}/")

    def key_from_url(self, url: str | None) -> Optional[str]:
        """Key of an object from its public URL; None for foreign URLs."""
        if not self.is_storage_url(url):
            return None
        return url[len(self.base_url.rstrip("/")) + 1:] or None

    def delete_url(self, url: str | None) -> bool:
        """Delete the object behind one of our URLs. Foreign URLs are left alone."""
        key = self.key_from_url(url)
        if key is None:
            return False
        return self.delete(key)

    def _get_content_type(self, key: str) -> str:
        content_type, _ = mimetypes.guess_type(key)
        return content_type or "application/octet-stream"


class LocalStorageClient(BaseStorageClient):
    """Local filesystem storage for development."""

    def __init__(self, base_path: str = None, base_url: str = None):
        self.base_path = Path(base_path or settings.LOCAL_STORAGE_PATH)
        self.base_url = base_url or settings.LOCAL_STORAGE_BASE_URL
        self.base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"LocalStorageClient initialized at {self.base_path}")

    def _get_full_path(self, key: str) -> Path:
        path = (self.base_path / key).resolve()
        if not path.is_relative_to(self.base_path.resolve()):
            raise ValueError(f"Key escapes storage root: {key}")
        return path

    def upload_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        file_path = self._get_full_path(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(data)

        logger.info(f"Uploaded {len(data)} bytes to {key}")
        return self.get_public_url(key)

    def delete(self, key: str) -> bool:
        self._get_full_path(key).unlink(missing_ok=True)
        logger.info(f"Deleted {key}")
        return True

    def exists(self, key: str) -> bool:
        return self._get_full_path(key).exists()


class SpacesStorageClient(BaseStorageClient):
    """DigitalOcean Spaces client using MinIO's S3 API."""

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        bucket: str,
        region: str,
        public_endpoint: str,
    ):
        self.bucket = bucket
        self.base_url = public_endpoint

        self._client = Minio(
            f"{region}.digitaloceanspaces.com",
            access_key=access_key,
            secret_key=secret_key,
            region=region,
            secure=True,
        )
        logger.info(f"SpacesStorageClient initialized for {region}/{bucket}")

    def upload_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        if content_type is None:
            content_type = self._get_content_type(key)

        self._client.put_object(
            self.bucket,
            key,
            io.BytesIO(data),
            length=len(data),
            content_type=content_type,
            metadata={"x-amz-acl": "public-read"},
        )

        logger.info(f"Uploaded {len(data)} bytes to spaces://{self.bucket}/{key}")
        return self.get_public_url(key)

    def delete(self, key: str) -> bool:
        # S3 deletes of absent keys succeed
        self._client.remove_object(self.bucket, key)
        logger.info(f"Deleted spaces://{self.bucket}/{key}")
        return True

    def exists(self, key: str) -> bool:
        try:
            self._client.stat_object(self.bucket, key)
            return True
        except S3Error as e:
            if e.code == "NoSuchKey":
                return False
            raise


def sanitize_filename(filename: str) -> str:
    """Keep letters, digits, dots, dashes and underscores."""
    name = Path(filename or "file").name
    return re.sub(r"[^A-Za-z0-9._-]", "_", name) or "file"


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-") or "site"


class FlexHubStoragePaths:
    """Helper class for consistent storage paths."""

    @staticmethod
    def site_image(site_id: UUID | str, image_type: str, filename: str) -> str:
        return f"flexhub/sites/{site_id}/{image_type}-{int(time.time() * 1000)}-{sanitize_filename(filename)}"

    @staticmethod
    def media_folder(folder: str | None) -> str:
        return "/".join(_slug(part) for part in (folder or "root").split("/") if part) or "root"

    @staticmethod
    def media(site_name: str, site_id: UUID | str, filename: str, folder: str | None = None) -> str:
        folder = FlexHubStoragePaths.media_folder(folder)
        return (
            f"flexhub/sites/{_slug(site_name)}-{site_id}/media/{folder}/"
            f"{int(time.time() * 1000)}-{sanitize_filename(filename)}"
        )

    @staticmethod
    def is_site_media(key: str | None, site_id: UUID | str, folder: str) -> bool:
        """Whether key lies in one of the site's media folders.

        Matches on the site id so keys written before a rename still count.
        """
        if not key:
            return False
        parts = key.split("/")
        if ".." in parts or len(parts) < 6:
            return False
        return (
            parts[:2] == ["flexhub", "sites"]
            and parts[2].endswith(f"-{site_id}")
            and parts[3] == "media"
            and "/".join(parts[4:-1]) == FlexHubStoragePaths.media_folder(folder)
        )


_default_client: Optional[BaseStorageClient] = None


def get_storage_client() -> BaseStorageClient:
    """Get or create the default storage client based on settings."""
    global _default_client

    if _default_client is None:
        provider = settings.STORAGE_PROVIDER
        if provider == "auto":
            provider = "spaces" if settings.has_spaces_config else "local"
        logger.info(f"Initializing storage client with provider: {provider}")

        if provider == "spaces":
            _default_client = SpacesStorageClient(
                access_key=settings.DO_SPACES_ACCESS_KEY,
                secret_key=settings.DO_SPACES_SECRET_KEY,
                bucket=settings.DO_SPACES_BUCKET,
                region=settings.DO_SPACES_REGION,
                public_endpoint=settings.DO_SPACES_ENDPOINT,
            )
        else:
            _default_client = LocalStorageClient()

    return _default_client


def reset_storage_client():
    """Reset the default client (useful for testing or config changes)."""
    global _default_client
    _default_client = None
