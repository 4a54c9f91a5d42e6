"""
Job board service: companies and job listings.
"""
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from flexhub.core.exceptions import BadRequestError
from flexhub.models.job_board import (
    Company,
    ExperienceLevel,
    JobListing,
    JobStatus,
    JobType,
    RemoteWorkType,
)
from flexhub.schemas.job_board import (
    CompanyCreate,
    CompanyUpdate,
    JobListingCreate,
    JobListingUpdate,
)

@dataclass
class JobListingFilters:
    """Query filters shared by the admin and public listing endpoints."""

    status: JobStatus | None = None
    job_type: JobType | None = None
    company_id: UUID | None = None
    search: str | None = None
    location: str | None = None
    experience_level: ExperienceLevel | None = None
    remote_work_type: RemoteWorkType | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    active_companies_only: bool = False


class CompanyService:
    """Service for company operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, site_id: UUID, company_id: UUID) -> Company | None:
        result = await self.db.execute(
            select(Company).where(Company.id == company_id, Company.site_id == site_id)
        )
        return result.scalar_one_or_none()

    async def list_with_counts(self, site_id: UUID) -> list[tuple[Company, int]]:
        """Companies of a site, newest first, with their job listing count."""
        result = await self.db.execute(
            select(Company, func.count(JobListing.id))
            .outerjoin(JobListing, JobListing.company_id == Company.id)
            .where(Company.site_id == site_id)
            .group_by(Company.id)
            .order_by(Company.created_at.desc())
        )
        return [(company, count) for company, count in result.all()]

    async def active_listings(self, company: Company) -> list[JobListing]:
        result = await self.db.execute(
            select(JobListing)
            .where(
                JobListing.company_id == company.id,
                JobListing.status == JobStatus.ACTIVE,
            )
            .order_by(JobListing.created_at.desc())
        )
        return list(result.scalars().all())

    async def create(self, site_id: UUID, data: CompanyCreate) -> Company:
        company = Company(site_id=site_id, **data.model_dump())
        self.db.add(company)
        await self.db.flush()
        await self.db.refresh(company)
        return company

    async def update(self, company: Company, data: CompanyUpdate) -> Company:
        company.apply_changes(data.model_dump(exclude_unset=True))
        await self.db.flush()
        await self.db.refresh(company)
        return company

    async def delete(self, company: Company) -> None:
        """Delete a company that no job listing references."""
        result = await self.db.execute(
            select(func.count(JobListing.id)).where(JobListing.company_id == company.id)
        )
        if result.scalar_one() > 0:
            raise BadRequestError(
                "Cannot delete company with active job listings. "
                "Please delete or deactivate all job listings first."
            )
        await self.db.delete(company)
        await self.db.flush()


class JobListingService:
    """Service for job listing operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, site_id: UUID, listing_id: UUID) -> JobListing | None:
        result = await self.db.execute(
            select(JobListing)
            .options(selectinload(JobListing.company))
            .where(JobListing.id == listing_id, JobListing.site_id == site_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    def _apply_filters(self, query, site_id: UUID, filters: JobListingFilters):
        query = query.join(Company, JobListing.company_id == Company.id).where(
            JobListing.site_id == site_id
        )
        if filters.status:
            query = query.where(JobListing.status == filters.status)
        if filters.job_type:
            query = query.where(JobListing.job_type == filters.job_type)
        if filters.company_id:
            query = query.where(JobListing.company_id == filters.company_id)
        if filters.location:
            query = query.where(JobListing.location.ilike(f"%{filters.location}%"))
        if filters.experience_level:
            query = query.where(JobListing.experience_level == filters.experience_level)
        if filters.remote_work_type:
            query = query.where(JobListing.remote_work_type == filters.remote_work_type)
        # Ranges overlap: the listing's upper bound reaches the wanted minimum and vice versa
        if filters.salary_min is not None:
            query = query.where(JobListing.salary_max >= filters.salary_min)
        if filters.salary_max is not None:
            query = query.where(JobListing.salary_min <= filters.salary_max)
        if filters.active_companies_only:
            query = query.where(Company.is_active.is_(True))
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(
                or_(
                    JobListing.title.ilike(pattern),
                    JobListing.description.ilike(pattern),
                    JobListing.location.ilike(pattern),
                    Company.name.ilike(pattern),
                )
            )
        return query

    async def list_listings(
        self,
        site_id: UUID,
        filters: JobListingFilters,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[JobListing], int]:
        """A page of listings, newest first, and the total matching count."""
        count_query = self._apply_filters(
            select(func.count(JobListing.id)).select_from(JobListing), site_id, filters
        )
        total = (await self.db.execute(count_query)).scalar_one()

        query = (
            self._apply_filters(select(JobListing), site_id, filters)
            .options(selectinload(JobListing.company))
            .order_by(JobListing.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def _validate_company(self, site_id: UUID, company_id: UUID) -> None:
        result = await self.db.execute(
            select(Company.id).where(
                Company.id == company_id,
                Company.site_id == site_id,
                Company.is_active.is_(True),
            )
        )
        if result.first() is None:
            raise BadRequestError("Company not found or inactive")

    async def create(self, site_id: UUID, data: JobListingCreate) -> JobListing:
        await self._validate_company(site_id, data.company_id)
        listing = JobListing(site_id=site_id, **data.model_dump())
        self.db.add(listing)
        await self.db.flush()
        return await self.get_by_id(site_id, listing.id)

    async def update(self, listing: JobListing, data: JobListingUpdate) -> JobListing:
        update_data = data.model_dump(exclude_unset=True)
        company_id = update_data.get("company_id")
        if company_id and company_id != listing.company_id:
            await self._validate_company(listing.site_id, company_id)

        listing.apply_changes(update_data)

        await self.db.flush()
        return await self.get_by_id(listing.site_id, listing.id)

    async def delete(self, listing: JobListing) -> None:
        await self.db.delete(listing)
        await self.db.flush()

    async def filter_values(self, site_id: UUID) -> dict:
        """Distinct values present among a site's active listings, for public filter widgets."""
        active = (JobListing.site_id == site_id, JobListing.status == JobStatus.ACTIVE)

        job_types = await self.db.execute(select(JobListing.job_type).where(*active).distinct())
        locations = await self.db.execute(
            select(JobListing.location)
            .where(*active, JobListing.location.is_not(None))
            .distinct()
        )
        experience_levels = await self.db.execute(
            select(JobListing.experience_level)
            .where(*active, JobListing.experience_level.is_not(None))
            .distinct()
        )
        remote_work_types = await self.db.execute(
            select(JobListing.remote_work_type)
            .where(*active, JobListing.remote_work_type.is_not(None))
            .distinct()
        )
        companies = await self.db.execute(
            select(Company)
            .where(Company.site_id == site_id, Company.is_active.is_(True))
            .order_by(Company.name.asc())
        )

        return {
            "job_types": list(job_types.scalars().all()),
            "companies": list(companies.scalars().all()),
            "locations": [loc for loc in locations.scalars().all() if loc],
            "experience_levels": list(experience_levels.scalars().all()),
            "remote_work_types": list(remote_work_types.scalars().all()),
        }
