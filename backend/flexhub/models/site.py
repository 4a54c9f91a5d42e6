"""
Site model, site membership and per-site feature flags.
"""
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from flexhub.models.base import Base, BaseModel, JSONType, SiteBaseModel


class FeatureType(str, PyEnum):
    PAGES = "PAGES"
    BLOG_POSTS = "BLOG_POSTS"
    MEDIA_FILES = "MEDIA_FILES"
    EMAIL_MANAGEMENT = "EMAIL_MANAGEMENT"
    CONTACT_MANAGEMENT = "CONTACT_MANAGEMENT"
    SPONSORS = "SPONSORS"
    ONLINE_STORE = "ONLINE_STORE"
    NEWSLETTER = "NEWSLETTER"
    ANALYTICS = "ANALYTICS"
    SEO_TOOLS = "SEO_TOOLS"
    SOCIAL_MEDIA_INTEGRATION = "SOCIAL_MEDIA_INTEGRATION"
    MULTI_LANGUAGE = "MULTI_LANGUAGE"
    CUSTOM_FORMS = "CUSTOM_FORMS"
    MEMBER_AREA = "MEMBER_AREA"
    EVENT_MANAGEMENT = "EVENT_MANAGEMENT"
    JOB_BOARD = "JOB_BOARD"


# Display name and description used when a feature is attached to a site
FEATURE_DEFINITIONS: dict[FeatureType, dict[str, str]] = {
    FeatureType.PAGES: {
        "display_name": "Pages",
        "description": "Create and manage static pages",
    },
    FeatureType.BLOG_POSTS: {
        "display_name": "Blog Posts",
        "description": "Publish and manage blog content",
    },
    FeatureType.MEDIA_FILES: {
        "display_name": "Media Files",
        "description": "Upload and manage media files",
    },
    FeatureType.EMAIL_MANAGEMENT: {
        "display_name": "Email Management",
        "description": "Manage email campaigns and templates",
    },
    FeatureType.CONTACT_MANAGEMENT: {
        "display_name": "Contact Management",
        "description": "Manage contact forms and inquiries",
    },
    FeatureType.SPONSORS: {
        "display_name": "Sponsors",
        "description": "Manage sponsor relationships and content",
    },
    FeatureType.ONLINE_STORE: {
        "display_name": "Online Store",
        "description": "E-commerce functionality",
    },
    FeatureType.NEWSLETTER: {
        "display_name": "Newsletter",
        "description": "Newsletter subscription and management",
    },
    FeatureType.ANALYTICS: {
        "display_name": "Analytics",
        "description": "Site analytics and reporting",
    },
    FeatureType.SEO_TOOLS: {
        "display_name": "SEO Tools",
        "description": "Search engine optimization tools",
    },
    FeatureType.SOCIAL_MEDIA_INTEGRATION: {
        "display_name": "Social Media Integration",
        "description": "Connect with social media platforms",
    },
    FeatureType.MULTI_LANGUAGE: {
        "display_name": "Multi Language",
        "description": "Multi-language content support",
    },
    FeatureType.CUSTOM_FORMS: {
        "display_name": "Custom Forms",
        "description": "Create custom forms and surveys",
    },
    FeatureType.MEMBER_AREA: {
        "display_name": "Member Area",
        "description": "Member-only content and features",
    },
    FeatureType.EVENT_MANAGEMENT: {
        "display_name": "Event Management",
        "description": "Manage events and registrations",
    },
    FeatureType.JOB_BOARD: {
        "display_name": "Job Board",
        "description": "Manage job listings and company profiles for your site",
    },
}


site_users = Table(
    "site_users",
    Base.metadata,
    Column(
        "site_id",
        Uuid(as_uuid=True),
        ForeignKey("sites.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Site(Base, BaseModel):
    """A tenant: owns its content, its feature flags and its member list."""

    __tablename__ = "sites"

    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    domain = Column(String(255), nullable=True, unique=True)
    logo = Column(String(1024), nullable=True)
    cover_image = Column(String(1024), nullable=True)

    # Relationships
    users = relationship("User", secondary=site_users, back_populates="sites")
    features = relationship(
        "SiteFeature",
        back_populates="site",
        cascade="all, delete-orphan",
        order_by="SiteFeature.created_at",
    )
    pages = relationship("Page", back_populates="site", cascade="all, delete-orphan")
    blog_posts = relationship("BlogPost", back_populates="site", cascade="all, delete-orphan")
    media_files = relationship("MediaFile", back_populates="site", cascade="all, delete-orphan")
    job_listings = relationship("JobListing", back_populates="site", cascade="all, delete-orphan")
    companies = relationship("Company", back_populates="site", cascade="all, delete-orphan")
    sponsors = relationship("Sponsor", back_populates="site", cascade="all, delete-orphan")
    social_media_channels = relationship(
        "SocialMediaChannel", back_populates="site", cascade="all, delete-orphan"
    )
    contact_form = relationship(
        "ContactForm", back_populates="site", uselist=False, cascade="all, delete-orphan"
    )
    contact_submissions = relationship(
        "ContactSubmission", back_populates="site", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Site {self.name}>"


class SiteFeature(Base, SiteBaseModel):
    """Per-site flag that gates an optional module."""

    __tablename__ = "site_features"
    __table_args__ = (UniqueConstraint("site_id", "feature", name="uq_site_feature"),)

    feature = Column(Enum(FeatureType), nullable=False)
    display_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_enabled = Column(Boolean, default=True, nullable=False)
    config = Column(JSONType, default=dict, nullable=False)

    site = relationship("Site", back_populates="features")

    def __repr__(self) -> str:
        return f"<SiteFeature {self.feature.value} enabled={self.is_enabled}>"
