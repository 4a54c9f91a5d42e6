"""
Page and blog post endpoints.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import AccessibleSite
from flexhub.core.exceptions import NotFoundError
from flexhub.database import get_db
from flexhub.schemas.common import MessageResponse
from flexhub.schemas.content import (
    BlogPostCreate,
    BlogPostResponse,
    BlogPostUpdate,
    PageCreate,
    PageResponse,
    PageUpdate,
)
from flexhub.services.content_service import BlogPostService, PageService

router = APIRouter(prefix="/sites/{site_id}", tags=["Content"])


@router.get("/pages", response_model=list[PageResponse])
async def list_pages(
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Pages of the site, most recently updated first."""
    return await PageService(db).list_for_site(site.id)


@router.post("/pages", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
async def create_page(
    data: PageCreate,
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await PageService(db).create(site.id, data)


@router.get("/pages/{page_id}", response_model=PageResponse)
async def get_page(
    page_id: UUID,
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    page = await PageService(db).get_by_id(site.id, page_id)
    if not page:
        raise NotFoundError("Page")
    return page


@router.put("/pages/{page_id}", response_model=PageResponse)
async def update_page(
    page_id: UUID,
    data: PageUpdate,
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = PageService(db)
    page = await service.get_by_id(site.id, page_id)
    if not page:
        raise NotFoundError("Page")
    return await service.update(page, data)


@router.delete("/pages/{page_id}", response_model=MessageResponse)
async def delete_page(
    page_id: UUID,
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = PageService(db)
    page = await service.get_by_id(site.id, page_id)
    if not page:
        raise NotFoundError("Page")
    await service.delete(page)
    return MessageResponse(message="Page deleted successfully")


@router.get("/blog-posts", response_model=list[BlogPostResponse])
async def list_blog_posts(
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Blog posts of the site, most recently updated first."""
    return await BlogPostService(db).list_for_site(site.id)


@router.post("/blog-posts", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
async def create_blog_post(
    data: BlogPostCreate,
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await BlogPostService(db).create(site.id, data)


@router.get("/blog-posts/{post_id}", response_model=BlogPostResponse)
async def get_blog_post(
    post_id: UUID,
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    post = await BlogPostService(db).get_by_id(site.id, post_id)
    if not post:
        raise NotFoundError("Blog post")
    return post


@router.put("/blog-posts/{post_id}", response_model=BlogPostResponse)
async def update_blog_post(
    post_id: UUID,
    data: BlogPostUpdate,
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a post. Publishing it for the first time stamps publishedAt."""
    service = BlogPostService(db)
    post = await service.get_by_id(site.id, post_id)
    if not post:
        raise NotFoundError("Blog post")
    return await service.update(post, data)


@router.delete("/blog-posts/{post_id}", response_model=MessageResponse)
async def delete_blog_post(
    post_id: UUID,
    site: AccessibleSite,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    service = BlogPostService(db)
    post = await service.get_by_id(site.id, post_id)
    if not post:
        raise NotFoundError("Blog post")
    await service.delete(post)
    return MessageResponse(message="Blog post deleted successfully")
