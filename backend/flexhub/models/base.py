"""
Base model mixins for FlexHub.
"""
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr, declarative_base

Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from backends without tz support."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UUIDMixin:
    """Mixin for UUID primary key."""

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
    )


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class SiteMixin:
    """Mixin for site-scoped models."""

    @declared_attr
    def site_id(cls):
        return Column(
            Uuid(as_uuid=True),
            ForeignKey("sites.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class BaseModel(UUIDMixin, TimestampMixin):
    """Base model with UUID and timestamps."""

    __abstract__ = True
    # Fetch server generated timestamps right after INSERT/UPDATE so async
    # code never triggers a lazy refresh.
    __mapper_args__ = {"eager_defaults": True}

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Set attributes from a partial update. None never clears a NOT NULL column."""
        columns = self.__table__.columns
        for field, value in changes.items():
            if value is None and field in columns and not columns[field].nullable:
                continue
            setattr(self, field, value)


class SiteBaseModel(BaseModel, SiteMixin):
    """Base model for site-scoped entities."""

    __abstract__ = True
