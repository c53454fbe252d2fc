# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-up, sign-in (password or Google OAuth), sign-out, password management
# and the caller's profile.
# All credential checks are delegated to Supabase Auth.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from core.models.user import (
    AuthSession,
    OAuthProvider,
    OAuthRedirect,
    PasswordResetRequest,
    PasswordUpdateRequest,
    Profile,
    ProfileUpdate,
    SignInRequest,
    SignUpRequest,
)
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=AuthSession, status_code=status.HTTP_201_CREATED)
async def sign_up(request: SignUpRequest) -> AuthSession:
    """
    Register with email and password.

    Tokens are omitted when the project requires email confirmation.
    """
    return AuthService.sign_up(request)


@router.post("/signin", response_model=AuthSession)
async def sign_in(request: SignInRequest) -> AuthSession:
    """Sign in with email and password."""
    return AuthService.sign_in(request)


@router.get("/oauth/{provider}", response_model=OAuthRedirect)
async def sign_in_with_oauth(
    provider: Annotated[OAuthProvider, Path(description="Identity provider")],
) -> OAuthRedirect:
    """
    Start a social sign-in.

    Returns the provider's consent URL. After consent the browser lands on
    the front-end's /auth/callback with the session in the URL fragment.
    """
    return AuthService.sign_in_with_oauth(provider)


@router.post("/signout")
async def sign_out(user: AuthUser = Depends(get_current_user)) -> dict:
    """Revoke the session behind the current token."""
    AuthService.sign_out(user.access_token)
    return {"message": "Signed out successfully"}


@router.post("/password/reset")
async def request_password_reset(request: PasswordResetRequest) -> dict:
    """
    Send a password reset email.

    The response doesn't say whether the email is registered.
    """
    AuthService.request_password_reset(request.email)
    return {"message": "If the email is registered, a reset link has been sent"}


@router.post("/password")
async def update_password(
    request: PasswordUpdateRequest,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """Change the current user's password."""
    AuthService.update_password(str(user.id), request.new_password)
    return {"message": "Password updated successfully"}


@router.get("/me", response_model=Profile)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> Profile:
    """
    Get the current user's profile.

    Raises:
        401: If not authenticated
        404: If the profile row hasn't been created yet
    """
    return AuthService.get_profile(str(user.id))


@router.patch("/me", response_model=Profile)
async def update_current_user_info(
    request: ProfileUpdate,
    user: AuthUser = Depends(get_current_user),
) -> Profile:
    """Update name, college, branch, year or avatar."""
    return AuthService.update_profile(str(user.id), request)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
