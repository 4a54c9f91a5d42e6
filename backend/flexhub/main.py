"""
FastAPI application entry point for FlexHub.
"""
import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.api.v1.router import api_router
from flexhub.config import settings
from flexhub.core.exceptions import (
    MissingFieldsError,
    integrity_error_handler,
    missing_fields_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from flexhub.core.public_cors import PublicCORSMiddleware
from flexhub.database import get_db, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    await init_db()
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started ({settings.ENVIRONMENT})")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)

app.add_exception_handler(MissingFieldsError, missing_fields_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# CORS middleware for the admin front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Added last so it runs first
app.add_middleware(PublicCORSMiddleware)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

if settings.uses_local_storage:
    app.mount(
        settings.LOCAL_STORAGE_BASE_URL,
        StaticFiles(directory=settings.LOCAL_STORAGE_PATH, check_dir=False),
        name="files",
    )


@app.get("/health")
async def health_check():
    """Liveness check."""
    return {"status": "healthy", "version": settings.VERSION}


@app.get(f"{settings.API_PREFIX}/health")
async def api_health_check(db: Annotated[AsyncSession, Depends(get_db)]):
    """Readiness check: the database answers."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "version": settings.VERSION},
        )
    return {"status": "healthy", "version": settings.VERSION}
