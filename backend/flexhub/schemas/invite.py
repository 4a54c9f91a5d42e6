"""
Invite schemas.
"""
from datetime import datetime

from pydantic import EmailStr

from flexhub.models.user import UserRole
from flexhub.schemas.auth import UserSummary
from flexhub.schemas.common import BaseSchema, IDSchema


class InviteCreate(BaseSchema):
    email: EmailStr
    role: UserRole


class InviteUpdate(BaseSchema):
    role: UserRole


class InviteResponse(IDSchema):
    email: str
    role: UserRole
    token: str
    invited_at: datetime
    expires_at: datetime
    is_used: bool
    used_at: datetime | None = None
    inviter: UserSummary | None = None
