"""
SQLAlchemy models for FlexHub.
"""
from flexhub.models.base import Base, BaseModel, SiteBaseModel
from flexhub.models.user import User, UserRole, Invite
from flexhub.models.site import Site, SiteFeature, FeatureType, FEATURE_DEFINITIONS, site_users
from flexhub.models.content import Page, BlogPost
from flexhub.models.media import MediaFile
from flexhub.models.job_board import (
    Company,
    JobListing,
    JobType,
    JobStatus,
    ExperienceLevel,
    RemoteWorkType,
)
from flexhub.models.contact import (
    ContactForm,
    ContactFormField,
    ContactFieldType,
    ContactSubmission,
    ContactSubmissionData,
)
from flexhub.models.sponsor import Sponsor
from flexhub.models.social import (
    SocialMediaChannel,
    SocialMediaChannelStat,
    SocialMediaPlatform,
    SocialMediaStatType,
)

__all__ = [
    "Base",
    "BaseModel",
    "SiteBaseModel",
    "User",
    "UserRole",
    "Invite",
    "Site",
    "SiteFeature",
    "FeatureType",
    "FEATURE_DEFINITIONS",
    "site_users",
    "Page",
    "BlogPost",
    "MediaFile",
    "Company",
    "JobListing",
    "JobType",
    "JobStatus",
    "ExperienceLevel",
    "RemoteWorkType",
    "ContactForm",
    "ContactFormField",
    "ContactFieldType",
    "ContactSubmission",
    "ContactSubmissionData",
    "Sponsor",
    "SocialMediaChannel",
    "SocialMediaChannelStat",
    "SocialMediaPlatform",
    "SocialMediaStatType",
]
