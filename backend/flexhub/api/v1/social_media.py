"""
Social media channel endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import SocialMediaSite
from flexhub.core.exceptions import NotFoundError
from flexhub.database import get_db
from flexhub.integrations.youtube import YouTubeClient, get_youtube_client
from flexhub.schemas.common import MessageResponse
from flexhub.schemas.social import ChannelCreate, ChannelResponse, ChannelUpdate
from flexhub.services.social_service import SocialMediaService

router = APIRouter(prefix="/sites/{site_id}/social-media", tags=["Social Media"])

YouTube = Annotated[YouTubeClient, Depends(get_youtube_client)]


@router.get("", response_model=list[ChannelResponse])
async def list_channels(
    site: SocialMediaSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    youtube: YouTube,
):
    """Linked channels in display order, with all their stats."""
    return await SocialMediaService(db, youtube).list_channels(site.id)


@router.post("", response_model=ChannelResponse, status_code=status.HTTP_201_CREATED)
async def create_channel(
    data: ChannelCreate,
    site: SocialMediaSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    youtube: YouTube,
):
    """Link a channel. YouTube channel ids are checked against the API first."""
    return await SocialMediaService(db, youtube).create_channel(site.id, data)


@router.put("/{channel_id}", response_model=ChannelResponse)
async def update_channel(
    channel_id: UUID,
    data: ChannelUpdate,
    site: SocialMediaSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    youtube: YouTube,
):
    service = SocialMediaService(db, youtube)
    channel = await service.get_channel(site.id, channel_id)
    if not channel:
        raise NotFoundError("Channel")
    return await service.update_channel(channel, data)


@router.delete("/{channel_id}", response_model=MessageResponse)
async def delete_channel(
    channel_id: UUID,
    site: SocialMediaSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    youtube: YouTube,
):
    service = SocialMediaService(db, youtube)
    channel = await service.get_channel(site.id, channel_id)
    if not channel:
        raise NotFoundError("Channel")
    await service.delete_channel(channel)
    return MessageResponse(message="Channel deleted successfully")
