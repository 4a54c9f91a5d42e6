"""
Media file model.
"""
from sqlalchemy import BigInteger, Column, String, Text
from sqlalchemy.orm import relationship

from flexhub.models.base import Base, SiteBaseModel


class MediaFile(Base, SiteBaseModel):
    """Uploaded blob. folder_path is a flat label, there is no folder table."""

    __tablename__ = "media_files"

    filename = Column(String(500), nullable=False)
    original_name = Column(String(500), nullable=False)
    mime_type = Column(String(255), nullable=False)
    size = Column(BigInteger, nullable=False)
    url = Column(String(2048), nullable=False)
    folder_path = Column(String(500), nullable=True, index=True)
    description = Column(Text, nullable=True)

    site = relationship("Site", back_populates="media_files")

    def __repr__(self) -> str:
        return f"<MediaFile {self.original_name}>"
