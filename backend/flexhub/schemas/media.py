"""
Media library schemas.
"""
from uuid import UUID

from flexhub.schemas.common import BaseSchema, IDSchema, SiteRef, TimestampSchema


class MediaFileResponse(IDSchema, TimestampSchema):
    site_id: UUID
    filename: str
    original_name: str
    mime_type: str
    size: int
    url: str
    folder_path: str | None = None
    description: str | None = None


class MediaLibraryResponse(BaseSchema):
    files: list[MediaFileResponse]
    # Files without a folder are grouped under "root"
    files_by_folder: dict[str, list[MediaFileResponse]]
    folders: list[str]
    site: SiteRef


class MediaUploadResponse(BaseSchema):
    message: str
    file: MediaFileResponse
