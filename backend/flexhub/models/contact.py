"""
Contact form schema and the submissions captured through it.

Submission values are stored one row per field (ContactSubmissionData) and
are always written and read as a whole submission.
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
    func,
)
from sqlalchemy.orm import relationship

from flexhub.models.base import Base, BaseModel, JSONType, SiteBaseModel


class ContactFieldType(str, PyEnum):
    TEXT = "TEXT"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    TEXTAREA = "TEXTAREA"
    SELECT = "SELECT"
    CHECKBOX = "CHECKBOX"
    RADIO = "RADIO"
    NUMBER = "NUMBER"
    URL = "URL"


class ContactForm(Base, BaseModel):
    """One contact form per site."""

    __tablename__ = "contact_forms"

    site_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("sites.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    name = Column(String(255), default="Contact Form", nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    site = relationship("Site", back_populates="contact_form")
    fields = relationship(
        "ContactFormField",
        back_populates="contact_form",
        cascade="all, delete-orphan",
        order_by="ContactFormField.sort_order",
    )

    def __repr__(self) -> str:
        return f"<ContactForm {self.name}>"


class ContactFormField(Base, BaseModel):
    __tablename__ = "contact_form_fields"

    contact_form_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("contact_forms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    field_name = Column(String(255), nullable=False)
    field_label = Column(String(255), nullable=False)
    field_type = Column(Enum(ContactFieldType), default=ContactFieldType.TEXT, nullable=False)
    is_required = Column(Boolean, default=False, nullable=False)
    placeholder = Column(String(500), nullable=True)
    help_text = Column(Text, nullable=True)
    options = Column(JSONType, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    contact_form = relationship("ContactForm", back_populates="fields")

    def __repr__(self) -> str:
        return f"<ContactFormField {self.field_name}>"


class ContactSubmission(Base, SiteBaseModel):
    __tablename__ = "contact_submissions"

    contact_form_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("contact_forms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    submitter_ip = Column(String(255), nullable=True)
    submitter_user_agent = Column(Text, nullable=True)
    is_read = Column(Boolean, default=False, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    site = relationship("Site", back_populates="contact_submissions")
    contact_form = relationship("ContactForm")
    submission_data = relationship(
        "ContactSubmissionData",
        back_populates="submission",
        cascade="all, delete-orphan",
    )

    @property
    def data(self) -> list["ContactSubmissionData"]:
        return self.submission_data

    def __repr__(self) -> str:
        return f"<ContactSubmission {self.id}>"


class ContactSubmissionData(Base, BaseModel):
    __tablename__ = "contact_submission_data"

    submission_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("contact_submissions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Replacing the form's fields removes the values captured for them
    contact_form_field_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("contact_form_fields.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    value = Column(Text, nullable=False)

    submission = relationship("ContactSubmission", back_populates="submission_data")
    contact_form_field = relationship("ContactFormField")

    @property
    def field(self) -> "ContactFormField":
        return self.contact_form_field
