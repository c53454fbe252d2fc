# =============================================================================
# core/services/auth_service.py - Auth & Profile Business Logic
# =============================================================================
# Thin wrappers over Supabase Auth. Backend errors are passed through to
# the caller as AuthenticationError with the backend's message.
#
# - sign_up / sign_in / OAuth use a fresh anon-key client per call
# - sign_out / update_password use the service-role admin API
# =============================================================================

import logging
from typing import Any

from app.config import settings
from app.exceptions import AuthenticationError, ProfileNotFoundError
from core.models.user import (
    AuthSession,
    OAuthProvider,
    OAuthRedirect,
    Profile,
    ProfileUpdate,
    SignInRequest,
    SignUpRequest,
    UserRole,
)
from lib.supabase_client import PROFILES_TABLE, SupabaseClient
from lib.utils import normalize_id

logger = logging.getLogger(__name__)


def _session_from_response(response: Any) -> AuthSession:
    """Build an AuthSession from a supabase AuthResponse."""
    user = response.user
    session = response.session

    if user is None:
        raise AuthenticationError("No user returned by auth backend")

    return AuthSession(
        user_id=str(user.id),
        email=user.email,
        access_token=session.access_token if session else None,
        refresh_token=session.refresh_token if session else None,
        expires_at=session.expires_at if session else None,
    )


class AuthService:
    """Service for sign-up, sign-in, sign-out and profile management."""

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    @staticmethod
    def sign_up(data: SignUpRequest) -> AuthSession:
        """
        Register a new user and create their profile.

        Profile fields are also stored as auth user metadata.

        Raises:
            AuthenticationError: If Supabase rejects the sign-up
        """
        client = SupabaseClient.create_auth_client()
        metadata = {
            "full_name": data.full_name,
            "college": data.college,
            "branch": data.branch,
            "year": data.year,
        }

        try:
            response = client.auth.sign_up({
                "email": data.email,
                "password": data.password,
                "options": {"data": metadata},
            })
        except Exception as e:
            logger.warning(f"Sign-up failed for {data.email}: {e}")
            raise AuthenticationError(str(e), status_code=400)

        auth_session = _session_from_response(response)

        SupabaseClient.upsert_profile({
            "id": auth_session.user_id,
            "email": data.email,
            "role": UserRole.STUDENT.value,
            "points": 0,
            **metadata,
        })

        logger.info(f"Signed up user: {auth_session.user_id}")
        return auth_session

    @staticmethod
    def sign_in(data: SignInRequest) -> AuthSession:
        """
        Password sign-in.

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        client = SupabaseClient.create_auth_client()

        try:
            response = client.auth.sign_in_with_password({
                "email": data.email,
                "password": data.password,
            })
        except Exception as e:
            logger.warning(f"Sign-in failed for {data.email}: {e}")
            raise AuthenticationError(str(e))

        auth_session = _session_from_response(response)
        logger.info(f"Signed in user: {auth_session.user_id}")
        return auth_session

    @staticmethod
    def sign_in_with_oauth(provider: OAuthProvider) -> OAuthRedirect:
        """
        Start an OAuth sign-in.

        The browser is sent to the returned URL; after consent the provider
        redirects to the front-end's /auth/callback with the session.

        Raises:
            AuthenticationError: If the backend can't build the redirect
        """
        client = SupabaseClient.create_auth_client()
        redirect_to = f"{settings.AUTH_REDIRECT_URL.rstrip('/')}/auth/callback"

        try:
            response = client.auth.sign_in_with_oauth({
                "provider": provider.value,
                "options": {"redirect_to": redirect_to},
            })
        except Exception as e:
            logger.warning(f"OAuth sign-in with {provider.value} failed: {e}")
            raise AuthenticationError(str(e), status_code=400)

        logger.info(f"OAuth sign-in started with {provider.value}")
        return OAuthRedirect(provider=provider, url=response.url)

    @staticmethod
    def sign_out(access_token: str) -> None:
        """
        Revoke the session behind an access token.

        Raises:
            AuthenticationError: If the backend rejects the token
        """
        client = SupabaseClient.get_client()

        try:
            client.auth.admin.sign_out(access_token)
        except Exception as e:
            logger.warning(f"Sign-out failed: {e}")
            raise AuthenticationError(str(e), status_code=400)

    @staticmethod
    def request_password_reset(email: str) -> None:
        """
        Send a password reset email that links back to the front-end.

        Raises:
            AuthenticationError: If the backend rejects the request
        """
        client = SupabaseClient.create_auth_client()
        redirect_to = f"{settings.AUTH_REDIRECT_URL.rstrip('/')}/auth/reset-password"

        try:
            client.auth.reset_password_for_email(email, {"redirect_to": redirect_to})
        except Exception as e:
            logger.warning(f"Password reset failed for {email}: {e}")
            raise AuthenticationError(str(e), status_code=400)

        logger.info(f"Password reset requested for {email}")

    @staticmethod
    def update_password(user_id: str, new_password: str) -> None:
        """
        Set a new password for an authenticated user.

        Raises:
            AuthenticationError: If the backend rejects the update
        """
        client = SupabaseClient.get_client()

        try:
            client.auth.admin.update_user_by_id(
                normalize_id(user_id), {"password": new_password}
            )
        except Exception as e:
            logger.warning(f"Password update failed for {user_id}: {e}")
            raise AuthenticationError(str(e), status_code=400)

        logger.info(f"Password updated for user: {user_id}")

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    @staticmethod
    def get_profile(user_id: str) -> Profile:
        """
        Raises:
            ProfileNotFoundError: If the user has no profile row
        """
        row = SupabaseClient.fetch_profile(user_id)
        if not row:
            raise ProfileNotFoundError(normalize_id(user_id))
        return Profile.model_validate(row)

    @staticmethod
    def get_role(user_id: str) -> UserRole:
        """Role of a user; users without a profile or with an unknown role are students."""
        row = SupabaseClient.fetch_profile(user_id)
        if not row:
            return UserRole.STUDENT

        try:
            return UserRole(row.get("role") or UserRole.STUDENT.value)
        except ValueError:
            logger.warning(
                f"Unknown role {row.get('role')!r} for user {user_id}; treating as student"
            )
            return UserRole.STUDENT

    @staticmethod
    def update_profile(user_id: str, updates: ProfileUpdate) -> Profile:
        """
        Update the user-editable profile fields.

        Raises:
            ProfileNotFoundError: If the user has no profile row
        """
        profile = AuthService.get_profile(user_id)

        update_data = updates.model_dump(exclude_unset=True)
        if not update_data:
            return profile

        row = SupabaseClient.update_row(PROFILES_TABLE, user_id, update_data)
        if not row:
            raise ProfileNotFoundError(normalize_id(user_id))

        logger.info(f"Updated profile: {user_id}")
        return Profile.model_validate(row)
