"""
Invitation endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import SuperAdmin
from flexhub.core.exceptions import NotFoundError
from flexhub.database import get_db
from flexhub.schemas.common import MessageResponse
from flexhub.schemas.invite import InviteCreate, InviteResponse, InviteUpdate
from flexhub.services.invite_service import InviteService

router = APIRouter(prefix="/invites", tags=["Invites"])


@router.get("", response_model=list[InviteResponse])
async def list_invites(
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await InviteService(db).list_invites()


@router.post("", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
async def create_invite(
    data: InviteCreate,
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Invite an email address. The invite expires after seven days."""
    return await InviteService(db).create(data.email, data.role, current_user)


@router.patch("/{invite_id}", response_model=InviteResponse)
async def update_invite(
    invite_id: UUID,
    data: InviteUpdate,
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = InviteService(db)
    invite = await service.get_by_id(invite_id)
    if not invite:
        raise NotFoundError("Invite")
    return await service.update_role(invite, data.role)


@router.delete("/{invite_id}", response_model=MessageResponse)
async def delete_invite(
    invite_id: UUID,
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = InviteService(db)
    invite = await service.get_by_id(invite_id)
    if not invite:
        raise NotFoundError("Invite")
    await service.delete(invite)
    return MessageResponse(message="Invite deleted successfully")
