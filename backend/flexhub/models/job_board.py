"""
Job board models: companies and their job listings.
"""
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from flexhub.models.base import Base, SiteBaseModel


class JobType(str, PyEnum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"
    FREELANCE = "FREELANCE"
    TEMPORARY = "TEMPORARY"
    VOLUNTEER = "VOLUNTEER"


class ExperienceLevel(str, PyEnum):
    ENTRY_LEVEL = "ENTRY_LEVEL"
    JUNIOR = "JUNIOR"
    MID_LEVEL = "MID_LEVEL"
    SENIOR = "SENIOR"
    EXECUTIVE = "EXECUTIVE"


class RemoteWorkType(str, PyEnum):
    ON_SITE = "ON_SITE"
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"


class JobStatus(str, PyEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    EXPIRED = "EXPIRED"
    FILLED = "FILLED"


class Company(Base, SiteBaseModel):
    """Employer profile on a site's job board."""

    __tablename__ = "companies"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    website = Column(String(1024), nullable=True)
    logo = Column(String(1024), nullable=True)
    location = Column(String(255), nullable=True)
    industry = Column(String(255), nullable=True)
    size = Column(String(100), nullable=True)
    founded = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    site = relationship("Site", back_populates="companies")
    # No cascade: a company with listings cannot be deleted
    job_listings = relationship("JobListing", back_populates="company", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<Company {self.name}>"


class JobListing(Base, SiteBaseModel):
    """Job offer published by a company of the same site."""

    __tablename__ = "job_listings"

    company_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)
    benefits = Column(Text, nullable=True)
    job_type = Column(Enum(JobType), nullable=False)
    experience_level = Column(Enum(ExperienceLevel), nullable=True)
    remote_work_type = Column(Enum(RemoteWorkType), nullable=True)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    salary_currency = Column(String(3), default="USD", nullable=False)
    location = Column(String(255), nullable=True)
    application_url = Column(String(2048), nullable=True)
    image = Column(String(2048), nullable=True)
    status = Column(Enum(JobStatus), default=JobStatus.ACTIVE, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    site = relationship("Site", back_populates="job_listings")
    company = relationship("Company", back_populates="job_listings")

    def __repr__(self) -> str:
        return f"<JobListing {self.title}>"
