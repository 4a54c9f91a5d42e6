"""
Authentication endpoints.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from flexhub.core.deps import CurrentUser
from flexhub.core.exceptions import ForbiddenError, UnauthorizedError
from flexhub.core.security import create_user_token, verify_provider_secret
from flexhub.database import get_db
from flexhub.schemas.auth import AuthResponse, LoginRequest, SignInRequest, UserResponse
from flexhub.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    request: SignInRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    x_auth_provider_secret: Annotated[str | None, Header()] = None,
) -> AuthResponse:
    """Exchange an identity verified by the OAuth provider for an access token.

    Unknown emails are only let in with a pending invitation.
    """
    if not verify_provider_secret(x_auth_provider_secret):
        raise UnauthorizedError("Invalid provider secret")

    user = await UserService(db).sign_in(request)

    return AuthResponse(
        access_token=create_user_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Authenticate an account that has a local password."""
    user_service = UserService(db)

    user = await user_service.authenticate(request.email, request.password)
    if not user:
        raise UnauthorizedError("Invalid email or password")

    if not user.is_active:
        raise ForbiddenError("User account is not active")

    await user_service.update_last_login(user)

    return AuthResponse(
        access_token=create_user_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: CurrentUser) -> UserResponse:
    """Get current user information."""
    return UserResponse.model_validate(current_user)
