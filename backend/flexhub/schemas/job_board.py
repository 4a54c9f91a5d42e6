"""
Job board schemas.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from flexhub.models.job_board import ExperienceLevel, JobStatus, JobType, RemoteWorkType
from flexhub.schemas.common import BaseSchema, IDSchema, Pagination, TimestampSchema


class CompanyCreate(BaseSchema):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    website: str | None = None
    logo: str | None = None
    location: str | None = None
    industry: str | None = None
    size: str | None = None
    founded: int | None = None


class CompanyUpdate(BaseSchema):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    website: str | None = None
    logo: str | None = None
    location: str | None = None
    industry: str | None = None
    size: str | None = None
    founded: int | None = None
    is_active: bool | None = None


class CompanySummary(IDSchema):
    name: str
    logo: str | None = None
    location: str | None = None
    industry: str | None = None
    website: str | None = None
    size: str | None = None


class CompanyResponse(IDSchema, TimestampSchema):
    site_id: UUID
    name: str
    description: str | None = None
    website: str | None = None
    logo: str | None = None
    location: str | None = None
    industry: str | None = None
    size: str | None = None
    founded: int | None = None
    is_active: bool


class CompanyWithCount(CompanyResponse):
    job_listing_count: int = 0


class JobListingCreate(BaseSchema):
    title: str = Field(min_length=1, max_length=500)
    description: str = Field(min_length=1)
    job_type: JobType
    company_id: UUID
    requirements: str | None = None
    benefits: str | None = None
    experience_level: ExperienceLevel | None = None
    remote_work_type: RemoteWorkType | None = None
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    salary_currency: str = Field(default="USD", min_length=3, max_length=3)
    location: str | None = None
    application_url: str | None = None
    image: str | None = None
    status: JobStatus = JobStatus.ACTIVE
    expires_at: datetime | None = None


class JobListingUpdate(BaseSchema):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = Field(default=None, min_length=1)
    job_type: JobType | None = None
    company_id: UUID | None = None
    requirements: str | None = None
    benefits: str | None = None
    experience_level: ExperienceLevel | None = None
    remote_work_type: RemoteWorkType | None = None
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    salary_currency: str | None = Field(default=None, min_length=3, max_length=3)
    location: str | None = None
    application_url: str | None = None
    image: str | None = None
    status: JobStatus | None = None
    expires_at: datetime | None = None


class JobListingResponse(IDSchema, TimestampSchema):
    site_id: UUID
    company_id: UUID
    title: str
    description: str
    requirements: str | None = None
    benefits: str | None = None
    job_type: JobType
    experience_level: ExperienceLevel | None = None
    remote_work_type: RemoteWorkType | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    salary_currency: str
    location: str | None = None
    application_url: str | None = None
    image: str | None = None
    status: JobStatus
    expires_at: datetime | None = None


class JobListingWithCompany(JobListingResponse):
    company: CompanySummary


class CompanyDetail(CompanyResponse):
    """Company with its active listings."""

    job_listings: list[JobListingResponse] = []


class JobListingListResponse(BaseSchema):
    job_listings: list[JobListingWithCompany]
    pagination: Pagination


class JobBoardFilters(BaseSchema):
    job_types: list[JobType] = []
    companies: list[CompanySummary] = []
    locations: list[str] = []
    experience_levels: list[ExperienceLevel] = []
    remote_work_types: list[RemoteWorkType] = []


class PublicJobBoardResponse(JobListingListResponse):
    filters: JobBoardFilters
    last_updated: datetime


class JobListingImageResponse(BaseSchema):
    message: str
    url: str
