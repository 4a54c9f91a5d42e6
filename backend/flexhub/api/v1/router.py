"""
API router aggregating all endpoints.
"""
from fastapi import APIRouter

from flexhub.api.v1.auth import router as auth_router
from flexhub.api.v1.companies import router as companies_router
from flexhub.api.v1.contact import router as contact_router
from flexhub.api.v1.features import router as features_router
from flexhub.api.v1.invites import router as invites_router
from flexhub.api.v1.job_listings import router as job_listings_router
from flexhub.api.v1.media import router as media_router
from flexhub.api.v1.pages import router as pages_router
from flexhub.api.v1.public import router as public_router
from flexhub.api.v1.site_users import router as site_users_router
from flexhub.api.v1.sites import router as sites_router
from flexhub.api.v1.social_media import router as social_media_router
from flexhub.api.v1.sponsors import router as sponsors_router
from flexhub.api.v1.users import router as users_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(sites_router)
api_router.include_router(features_router)
api_router.include_router(site_users_router)
api_router.include_router(users_router)
api_router.include_router(invites_router)
api_router.include_router(pages_router)
api_router.include_router(companies_router)
api_router.include_router(job_listings_router)
api_router.include_router(contact_router)
api_router.include_router(sponsors_router)
api_router.include_router(social_media_router)
api_router.include_router(media_router)
api_router.include_router(public_router)
