"""
Media library and image upload service.

Blobs go to the configured storage backend; MediaFile rows record them.
"""
import asyncio
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.exceptions import BadRequestError
from flexhub.integrations.storage import BaseStorageClient, FlexHubStoragePaths, get_storage_client
from flexhub.models.media import MediaFile
from flexhub.models.site import Site

logger = logging.getLogger(__name__)

MAX_MEDIA_SIZE = 50 * 1024 * 1024
MAX_IMAGE_SIZE = 5 * 1024 * 1024

ALLOWED_MEDIA_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
    "video/mp4",
    "video/webm",
    "video/ogg",
    "audio/mp3",
    "audio/wav",
    "audio/ogg",
    "application/pdf",
    "text/plain",
    "application/json",
    "application/xml",
}

ROOT_FOLDER = "root"
JOB_LISTING_FOLDER = "job-listings"


def validate_image(content_type: str | None, size: int) -> None:
    """Images must be image/* and at most 5 MB."""
    if not content_type or not content_type.startswith("image/"):
        raise BadRequestError("File must be an image")
    if size > MAX_IMAGE_SIZE:
        raise BadRequestError("Image size must be less than 5MB")


def validate_media(content_type: str | None, size: int) -> None:
    if size > MAX_MEDIA_SIZE:
        raise BadRequestError("File size must be less than 50MB")
    if content_type not in ALLOWED_MEDIA_TYPES:
        raise BadRequestError("File type not supported")


def delete_blob(storage: BaseStorageClient, url: str | None) -> None:
    """Best-effort removal of one of our blobs; failures are logged."""
    if not url:
        return
    try:
        storage.delete_url(url)
    except Exception as e:
        logger.warning(f"Failed to delete blob {url}: {e}")


class MediaService:
    """Service for a site's media library."""

    def __init__(self, db: AsyncSession, storage: BaseStorageClient | None = None):
        self.db = db
        self.storage = storage or get_storage_client()

    async def get_by_id(self, site_id: UUID, file_id: UUID) -> MediaFile | None:
        result = await self.db.execute(
            select(MediaFile).where(MediaFile.id == file_id, MediaFile.site_id == site_id)
        )
        return result.scalar_one_or_none()

    async def list_files(self, site_id: UUID, folder: str | None = None) -> list[MediaFile]:
        """Files ordered by folder, newest first within a folder."""
        query = select(MediaFile).where(MediaFile.site_id == site_id)
        if folder:
            query = query.where(MediaFile.folder_path == folder)
        result = await self.db.execute(
            query.order_by(MediaFile.folder_path.asc(), MediaFile.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    def group_by_folder(files: list[MediaFile]) -> tuple[dict[str, list[MediaFile]], list[str]]:
        """Files keyed by folder ("root" for none) and the sorted named folders."""
        grouped: dict[str, list[MediaFile]] = {}
        for media_file in files:
            grouped.setdefault(media_file.folder_path or ROOT_FOLDER, []).append(media_file)
        folders = sorted({f.folder_path for f in files if f.folder_path})
        return grouped, folders

    async def upload(
        self,
        site: Site,
        filename: str,
        content_type: str | None,
        data: bytes,
        folder_path: str | None = None,
        description: str | None = None,
    ) -> MediaFile:
        validate_media(content_type, len(data))
        folder_path = (folder_path or "").strip() or None

        key = FlexHubStoragePaths.media(site.name, site.id, filename, folder_path)
        url = await self._upload(key, data, content_type)

        media_file = MediaFile(
            site_id=site.id,
            filename=key.rsplit("/", 1)[-1],
            original_name=filename,
            mime_type=content_type,
            size=len(data),
            url=url,
            folder_path=folder_path,
            description=description,
        )
        self.db.add(media_file)
        try:
            await self.db.flush()
        except Exception:
            await self.delete_url(url)
            raise
        await self.db.refresh(media_file)
        logger.info(f"Uploaded media {media_file.original_name} ({media_file.size} bytes) to site {site.id}")
        return media_file

    async def delete(self, media_file: MediaFile) -> None:
        """Remove the blob, then the row. A blob that cannot be removed does not block the row."""
        await self.delete_url(media_file.url)
        await self.db.delete(media_file)
        await self.db.flush()

    async def upload_site_image(
        self, site: Site, image_type: str, filename: str, content_type: str | None, data: bytes
    ) -> str:
        validate_image(content_type, len(data))
        key = FlexHubStoragePaths.site_image(site.id, image_type, filename)
        return await self._upload(key, data, content_type)

    async def upload_job_listing_image(
        self, site: Site, filename: str, content_type: str | None, data: bytes
    ) -> str:
        validate_image(content_type, len(data))
        key = FlexHubStoragePaths.media(site.name, site.id, filename, JOB_LISTING_FOLDER)
        return await self._upload(key, data, content_type)

    async def delete_job_listing_image(self, site: Site, url: str) -> bool:
        """Delete a listing image of this site. Any other URL is left alone."""
        key = self.storage.key_from_url(url)
        if not FlexHubStoragePaths.is_site_media(key, site.id, JOB_LISTING_FOLDER):
            logger.warning(f"Refusing to delete {url}: not a job listing image of site {site.id}")
            return False
        await self.delete_url(url)
        return True

    async def delete_url(self, url: str | None) -> None:
        await asyncio.get_event_loop().run_in_executor(None, delete_blob, self.storage, url)

    async def _upload(self, key: str, data: bytes, content_type: str | None) -> str:
        """Store a blob off the event loop."""
        return await asyncio.get_event_loop().run_in_executor(
            None,
            self.storage.upload_bytes,
            key,
            data,
            content_type,
        )
