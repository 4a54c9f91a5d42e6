"""
Contact form and submission schemas.
"""
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from flexhub.models.contact import ContactFieldType
from flexhub.schemas.common import BaseSchema, IDSchema, Pagination, SiteRef, TimestampSchema


class ContactFormFieldInput(BaseSchema):
    field_name: str = Field(min_length=1, max_length=255)
    field_label: str = Field(min_length=1, max_length=255)
    field_type: ContactFieldType = ContactFieldType.TEXT
    is_required: bool = False
    placeholder: str | None = None
    help_text: str | None = None
    options: list[str] | None = None
    sort_order: int | None = None
    is_active: bool = True


class ContactFormCreate(BaseSchema):
    name: str = Field(default="Contact Form", min_length=1, max_length=255)
    description: str | None = None
    is_active: bool = True
    fields: list[ContactFormFieldInput] = []


class ContactFormUpdate(BaseSchema):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    is_active: bool | None = None
    # When present, replaces every field of the form
    fields: list[ContactFormFieldInput] | None = None


class ContactFormFieldResponse(IDSchema):
    field_name: str
    field_label: str
    field_type: ContactFieldType
    is_required: bool
    placeholder: str | None = None
    help_text: str | None = None
    options: list[str] | None = None
    sort_order: int
    is_active: bool


class ContactFormResponse(IDSchema, TimestampSchema):
    site_id: UUID
    name: str
    description: str | None = None
    is_active: bool
    fields: list[ContactFormFieldResponse] = []


class ContactFormEnvelope(BaseSchema):
    contact_form: ContactFormResponse | None = None


class SubmissionFieldRef(IDSchema):
    field_name: str
    field_label: str
    field_type: ContactFieldType


class SubmissionValue(IDSchema):
    value: str
    field: SubmissionFieldRef


class ContactSubmissionResponse(IDSchema):
    site_id: UUID
    contact_form_id: UUID
    submitter_ip: str | None = None
    submitter_user_agent: str | None = None
    is_read: bool
    is_archived: bool
    submitted_at: datetime
    data: list[SubmissionValue] = []


class AdminContactSubmission(ContactSubmissionResponse):
    site: SiteRef


class ContactSubmissionUpdate(BaseSchema):
    is_read: bool | None = None
    is_archived: bool | None = None


class ContactSubmissionListResponse(BaseSchema):
    submissions: list[ContactSubmissionResponse]
    pagination: Pagination


class SiteSubmissionCount(IDSchema):
    name: str
    domain: str | None = None
    submission_count: int


class AdminContactSubmissionListResponse(BaseSchema):
    submissions: list[AdminContactSubmission]
    sites: list[SiteSubmissionCount]
    pagination: Pagination


class PublicContactSubmit(BaseSchema):
    """Values keyed by field name."""

    data: dict[str, Any] = {}


class PublicContactResponse(BaseSchema):
    success: bool
    message: str
