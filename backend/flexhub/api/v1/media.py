"""
Media library endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import AccessibleSite
from flexhub.core.exceptions import NotFoundError
from flexhub.database import get_db
from flexhub.schemas.common import MessageResponse, SiteRef
from flexhub.schemas.media import MediaFileResponse, MediaLibraryResponse, MediaUploadResponse
from flexhub.services.media_service import MediaService

router = APIRouter(prefix="/sites/{site_id}/media", tags=["Media"])


@router.get("", response_model=MediaLibraryResponse)
async def list_media(
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    folder: str | None = None,
):
    """Media files of the site, also grouped by folder."""
    service = MediaService(db)
    files = await service.list_files(site.id, folder)
    grouped, folders = service.group_by_folder(files)

    return MediaLibraryResponse(
        files=[MediaFileResponse.model_validate(f) for f in files],
        files_by_folder={
            name: [MediaFileResponse.model_validate(f) for f in items]
            for name, items in grouped.items()
        },
        folders=folders,
        site=SiteRef(id=site.id, name=site.name),
    )


@router.post("", response_model=MediaUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    file: Annotated[UploadFile, File()],
    folder_path: Annotated[str | None, Form(alias="folderPath")] = None,
    description: Annotated[str | None, Form()] = None,
):
    data = await file.read()
    media_file = await MediaService(db).upload(
        site,
        filename=file.filename or "file",
        content_type=file.content_type,
        data=data,
        folder_path=folder_path,
        description=description,
    )
    return MediaUploadResponse(
        message="File uploaded successfully",
        file=MediaFileResponse.model_validate(media_file),
    )


@router.delete("/{file_id}", response_model=MessageResponse)
async def delete_media(
    file_id: UUID,
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a file. The row goes even when the blob cannot be removed."""
    service = MediaService(db)
    media_file = await service.get_by_id(site.id, file_id)
    if not media_file:
        raise NotFoundError("Media file")
    await service.delete(media_file)
    return MessageResponse(message="File deleted successfully")
