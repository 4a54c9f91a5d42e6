"""
Page and blog post models.
"""
from sqlalchemy import Boolean, Column, DateTime, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from flexhub.models.base import Base, SiteBaseModel


class Page(Base, SiteBaseModel):
    """Static page of a site."""

    __tablename__ = "pages"
    __table_args__ = (UniqueConstraint("site_id", "slug", name="uq_page_site_slug"),)

    title = Column(String(500), nullable=False)
    slug = Column(String(500), nullable=False)
    content = Column(Text, nullable=True)
    is_published = Column(Boolean, default=False, nullable=False)

    site = relationship("Site", back_populates="pages")

    def __repr__(self) -> str:
        return f"<Page {self.slug}>"


class BlogPost(Base, SiteBaseModel):
    """Blog post of a site."""

    __tablename__ = "blog_posts"
    __table_args__ = (UniqueConstraint("site_id", "slug", name="uq_blog_post_site_slug"),)

    title = Column(String(500), nullable=False)
    slug = Column(String(500), nullable=False)
    content = Column(Text, nullable=True)
    excerpt = Column(Text, nullable=True)
    is_published = Column(Boolean, default=False, nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)

    site = relationship("Site", back_populates="blog_posts")

    def __repr__(self) -> str:
        return f"<BlogPost {self.slug}>"
