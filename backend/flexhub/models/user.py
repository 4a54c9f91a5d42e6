"""
User and invite models with role-based access control.
"""
from enum import Enum as PyEnum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, String, Uuid, func
from sqlalchemy.orm import relationship

from flexhub.models.base import Base, BaseModel, as_utc, utcnow


class UserRole(str, PyEnum):
    USER = "USER"
    ADMIN = "ADMIN"
    SUPERADMIN = "SUPERADMIN"


class User(Base, BaseModel):
    """Platform user. Access to sites comes from membership or the SUPERADMIN role."""

    __tablename__ = "users"

    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    image = Column(String(1024), nullable=True)
    role = Column(
        Enum(UserRole),
        default=UserRole.USER,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False)
    is_invited = Column(Boolean, default=False, nullable=False)
    invited_by = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    invited_at = Column(DateTime(timezone=True), nullable=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    # Only set for break-glass accounts created from the command line
    password_hash = Column(String(255), nullable=True)
    current_site_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("sites.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    sites = relationship("Site", secondary="site_users", back_populates="users")
    current_site = relationship("Site", foreign_keys=[current_site_id])

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value})>"

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPERADMIN

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.SUPERADMIN, UserRole.ADMIN)


class Invite(Base, BaseModel):
    """Single-use invitation that lets a new email sign in."""

    __tablename__ = "invites"

    email = Column(String(255), nullable=False, index=True)
    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False)
    token = Column(String(64), nullable=False, unique=True, index=True)
    invited_by = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    invited_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    is_used = Column(Boolean, default=False, nullable=False)
    used_at = Column(DateTime(timezone=True), nullable=True)

    inviter = relationship("User", foreign_keys=[invited_by])

    def __repr__(self) -> str:
        return f"<Invite {self.email} ({self.role.value})>"

    @property
    def is_expired(self) -> bool:
        return as_utc(self.expires_at) <= utcnow()
