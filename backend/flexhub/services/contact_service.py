"""
Contact form service: form schema, field replacement and submissions.
"""
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from flexhub.core.exceptions import BadRequestError, MissingFieldsError, NotFoundError
from flexhub.models.contact import (
    ContactForm,
    ContactFormField,
    ContactSubmission,
    ContactSubmissionData,
)
from flexhub.models.site import FeatureType, Site, SiteFeature
from flexhub.models.user import User
from flexhub.schemas.contact import (
    ContactFormCreate,
    ContactFormFieldInput,
    ContactFormUpdate,
    ContactSubmissionUpdate,
)

logger = logging.getLogger(__name__)

MAX_VALUE_LENGTH = 5000


def client_ip(headers) -> str:
    """First x-forwarded-for hop, then x-real-ip, else "unknown"."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return headers.get("x-real-ip") or "unknown"


def _sort_submission_data(submission: ContactSubmission) -> ContactSubmission:
    submission.submission_data.sort(key=lambda item: item.contact_form_field.sort_order)
    return submission


class ContactService:
    """Service for a site's contact form and its submissions."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # Form

    async def get_form(self, site_id: UUID) -> ContactForm | None:
        result = await self.db.execute(
            select(ContactForm)
            .options(selectinload(ContactForm.fields))
            .where(ContactForm.site_id == site_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _build_fields(form_id: UUID, fields: list[ContactFormFieldInput]) -> list[ContactFormField]:
        return [
            ContactFormField(
                contact_form_id=form_id,
                field_name=field.field_name,
                field_label=field.field_label,
                field_type=field.field_type,
                is_required=field.is_required,
                placeholder=field.placeholder,
                help_text=field.help_text,
                options=field.options,
                sort_order=field.sort_order if field.sort_order is not None else index,
                is_active=field.is_active,
            )
            for index, field in enumerate(fields)
        ]

    async def create_form(self, site_id: UUID, data: ContactFormCreate) -> ContactForm:
        if await self.get_form(site_id):
            raise BadRequestError("Contact form already exists for this site")

        form = ContactForm(
            site_id=site_id,
            name=data.name,
            description=data.description,
            is_active=data.is_active,
        )
        self.db.add(form)
        await self.db.flush()

        self.db.add_all(self._build_fields(form.id, data.fields))
        await self.db.flush()
        return await self.get_form(site_id)

    async def update_form(self, site_id: UUID, data: ContactFormUpdate) -> ContactForm:
        """Update form attributes and, when fields are given, replace all of them.

        Replacement drops the old fields together with the submission values
        recorded against them. It runs in the request transaction, so a
        failure leaves the previous fields in place.
        """
        form = await self.get_form(site_id)
        if form is None:
            raise NotFoundError("Contact form")

        for field in ("name", "description", "is_active"):
            value = getattr(data, field)
            if value is not None:
                setattr(form, field, value)

        if data.fields is not None:
            old_field_ids = select(ContactFormField.id).where(
                ContactFormField.contact_form_id == form.id
            )
            await self.db.execute(
                delete(ContactSubmissionData).where(
                    ContactSubmissionData.contact_form_field_id.in_(old_field_ids)
                )
            )
            await self.db.execute(
                delete(ContactFormField).where(ContactFormField.contact_form_id == form.id)
            )
            self.db.add_all(self._build_fields(form.id, data.fields))
            logger.info(f"Replaced contact form fields for site {site_id} ({len(data.fields)} fields)")

        await self.db.flush()
        return await self.get_form(site_id)

    # Submissions

    def _submission_query(self):
        return (
            select(ContactSubmission)
            .options(
                selectinload(ContactSubmission.submission_data).selectinload(
                    ContactSubmissionData.contact_form_field
                ),
                selectinload(ContactSubmission.site),
            )
            .execution_options(populate_existing=True)
        )

    async def list_submissions(
        self,
        site_id: UUID,
        is_read: bool | None = None,
        is_archived: bool | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[ContactSubmission], int]:
        conditions = [ContactSubmission.site_id == site_id]
        if is_read is not None:
            conditions.append(ContactSubmission.is_read.is_(is_read))
        if is_archived is not None:
            conditions.append(ContactSubmission.is_archived.is_(is_archived))

        total = (
            await self.db.execute(select(func.count(ContactSubmission.id)).where(*conditions))
        ).scalar_one()
        result = await self.db.execute(
            self._submission_query()
            .where(*conditions)
            .order_by(ContactSubmission.submitted_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return [_sort_submission_data(s) for s in result.scalars().all()], total

    async def get_submission(self, site_id: UUID, submission_id: UUID) -> ContactSubmission | None:
        result = await self.db.execute(
            self._submission_query()
            .where(
                ContactSubmission.id == submission_id,
                ContactSubmission.site_id == site_id,
            )
        )
        submission = result.scalar_one_or_none()
        return _sort_submission_data(submission) if submission else None

    async def update_submission(
        self,
        submission: ContactSubmission,
        data: ContactSubmissionUpdate,
    ) -> ContactSubmission:
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(submission, field, value)
        await self.db.flush()
        return await self.get_submission(submission.site_id, submission.id)

    async def delete_submission(self, submission: ContactSubmission) -> None:
        await self.db.delete(submission)
        await self.db.flush()

    # Cross-site admin view

    def _managed_sites_condition(self, user: User, site_id: UUID | None):
        conditions = [
            Site.features.any(
                (SiteFeature.feature == FeatureType.CONTACT_MANAGEMENT)
                & SiteFeature.is_enabled.is_(True)
            )
        ]
        if not user.is_super_admin:
            conditions.append(Site.users.any(User.id == user.id))
        if site_id:
            conditions.append(Site.id == site_id)
        return conditions

    async def list_admin_submissions(
        self,
        user: User,
        site_id: UUID | None = None,
        is_read: bool | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[ContactSubmission], int, list[tuple[Site, int]]]:
        """Submissions of every site the caller manages that has contact management on.

        Also returns those sites with their submission counts, for filtering.
        """
        site_conditions = self._managed_sites_condition(user, site_id)
        site_ids = select(Site.id).where(*site_conditions)

        conditions = [ContactSubmission.site_id.in_(site_ids)]
        if is_read is not None:
            conditions.append(ContactSubmission.is_read.is_(is_read))

        total = (
            await self.db.execute(select(func.count(ContactSubmission.id)).where(*conditions))
        ).scalar_one()
        result = await self.db.execute(
            self._submission_query()
            .where(*conditions)
            .order_by(ContactSubmission.submitted_at.desc())
            .offset(offset)
            .limit(limit)
        )
        submissions = [_sort_submission_data(s) for s in result.scalars().all()]

        sites_result = await self.db.execute(
            select(Site, func.count(ContactSubmission.id))
            .outerjoin(ContactSubmission, ContactSubmission.site_id == Site.id)
            .where(*site_conditions)
            .group_by(Site.id)
            .order_by(Site.name.asc())
        )
        sites = [(site, count) for site, count in sites_result.all()]
        return submissions, total, sites

    # Public

    async def submit(
        self,
        site_id: UUID,
        values: dict[str, Any],
        ip_address: str,
        user_agent: str,
    ) -> ContactSubmission:
        """Record a visitor's submission against the site's active form."""
        site = await self.db.get(Site, site_id)
        if site is None:
            raise NotFoundError("Site")

        form = await self.get_form(site_id)
        if form is None or not form.is_active:
            raise NotFoundError(detail="Contact form not available")

        fields = [field for field in form.fields if field.is_active]

        missing = [
            field.field_label
            for field in fields
            if field.is_required and not str(values.get(field.field_name) or "").strip()
        ]
        if missing:
            raise MissingFieldsError(missing)

        submission = ContactSubmission(
            site_id=site_id,
            contact_form_id=form.id,
            submitter_ip=ip_address,
            submitter_user_agent=user_agent,
        )
        submission.submission_data = [
            ContactSubmissionData(
                contact_form_field_id=field.id,
                value=str(values[field.field_name])[:MAX_VALUE_LENGTH],
            )
            for field in fields
            if values.get(field.field_name)
        ]
        self.db.add(submission)
        await self.db.flush()
        logger.info(f"Contact submission {submission.id} recorded for site {site_id}")
        return submission
