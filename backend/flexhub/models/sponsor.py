"""
Sponsor model.
"""
from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from flexhub.models.base import Base, SiteBaseModel


class Sponsor(Base, SiteBaseModel):
    __tablename__ = "sponsors"

    name = Column(String(255), nullable=False)
    url = Column(String(2048), nullable=True)
    logo = Column(String(2048), nullable=True)
    active = Column(Boolean, default=True, nullable=False)

    site = relationship("Site", back_populates="sponsors")

    def __repr__(self) -> str:
        return f"<Sponsor {self.name}>"
