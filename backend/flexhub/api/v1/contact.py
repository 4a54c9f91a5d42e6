"""
Contact form and submission endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import AdminUser, ContactSite, Paging
from flexhub.core.exceptions import NotFoundError
from flexhub.database import get_db
from flexhub.schemas.common import MessageResponse, Pagination
from flexhub.schemas.contact import (
    AdminContactSubmission,
    AdminContactSubmissionListResponse,
    ContactFormCreate,
    ContactFormEnvelope,
    ContactFormUpdate,
    ContactSubmissionListResponse,
    ContactSubmissionResponse,
    ContactSubmissionUpdate,
    SiteSubmissionCount,
)
from flexhub.services.contact_service import ContactService

router = APIRouter(tags=["Contact"])


@router.get("/sites/{site_id}/contact-form", response_model=ContactFormEnvelope)
async def get_contact_form(
    site: ContactSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """The site's contact form with its fields, or null."""
    return ContactFormEnvelope(contact_form=await ContactService(db).get_form(site.id))


@router.post(
    "/sites/{site_id}/contact-form",
    response_model=ContactFormEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_contact_form(
    data: ContactFormCreate,
    site: ContactSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return ContactFormEnvelope(contact_form=await ContactService(db).create_form(site.id, data))


@router.put("/sites/{site_id}/contact-form", response_model=ContactFormEnvelope)
async def update_contact_form(
    data: ContactFormUpdate,
    site: ContactSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update the form. A fields list replaces every existing field."""
    return ContactFormEnvelope(contact_form=await ContactService(db).update_form(site.id, data))


@router.get("/sites/{site_id}/contact-submissions", response_model=ContactSubmissionListResponse)
async def list_contact_submissions(
    site: ContactSite,
    db: Annotated[AsyncSession, Depends(get_db)],
    pagination: Paging,
    is_read: Annotated[bool | None, Query(alias="isRead")] = None,
    is_archived: Annotated[bool | None, Query(alias="isArchived")] = None,
):
    submissions, total = await ContactService(db).list_submissions(
        site.id,
        is_read=is_read,
        is_archived=is_archived,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return ContactSubmissionListResponse(
        submissions=[ContactSubmissionResponse.model_validate(s) for s in submissions],
        pagination=Pagination.create(pagination.page, pagination.limit, total),
    )


@router.get(
    "/sites/{site_id}/contact-submissions/{submission_id}",
    response_model=ContactSubmissionResponse,
)
async def get_contact_submission(
    submission_id: UUID,
    site: ContactSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    submission = await ContactService(db).get_submission(site.id, submission_id)
    if not submission:
        raise NotFoundError("Submission")
    return submission


@router.put(
    "/sites/{site_id}/contact-submissions/{submission_id}",
    response_model=ContactSubmissionResponse,
)
async def update_contact_submission(
    submission_id: UUID,
    data: ContactSubmissionUpdate,
    site: ContactSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Mark a submission read or archived."""
    service = ContactService(db)
    submission = await service.get_submission(site.id, submission_id)
    if not submission:
        raise NotFoundError("Submission")
    return await service.update_submission(submission, data)


@router.delete(
    "/sites/{site_id}/contact-submissions/{submission_id}",
    response_model=MessageResponse,
)
async def delete_contact_submission(
    submission_id: UUID,
    site: ContactSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = ContactService(db)
    submission = await service.get_submission(site.id, submission_id)
    if not submission:
        raise NotFoundError("Submission")
    await service.delete_submission(submission)
    return MessageResponse(message="Submission deleted successfully")


@router.get("/admin/contact-submissions", response_model=AdminContactSubmissionListResponse)
async def list_admin_contact_submissions(
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    pagination: Paging,
    site_id: Annotated[UUID | None, Query(alias="siteId")] = None,
    is_read: Annotated[bool | None, Query(alias="isRead")] = None,
):
    """Submissions across every managed site that has contact management enabled."""
    submissions, total, sites = await ContactService(db).list_admin_submissions(
        current_user,
        site_id=site_id,
        is_read=is_read,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return AdminContactSubmissionListResponse(
        submissions=[AdminContactSubmission.model_validate(s) for s in submissions],
        sites=[
            SiteSubmissionCount(id=site.id, name=site.name, domain=site.domain, submission_count=count)
            for site, count in sites
        ],
        pagination=Pagination.create(pagination.page, pagination.limit, total),
    )
