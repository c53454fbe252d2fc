# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and role checks.
#
# Token verification supports both:
# - asymmetric Supabase JWT signing keys (ES256/RS256) via JWKS
# - HS256 (legacy Supabase JWT secret)
#
# Usage:
#   from app.auth import get_current_user, require_role, AuthUser
#
#   @router.post("/resources")
#   async def upload(user: AuthUser = Depends(require_role(UserRole.UPLOADER, UserRole.ADMIN))):
#       ...
# =============================================================================

import logging
import time
from typing import Optional
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser
from app.config import settings
from app.exceptions import PermissionDeniedError
from core.models.user import UserRole
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()
security_optional = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # seconds


def _fetch_jwks() -> dict:
    """Fetch the project's JWKS, cached for JWKS_CACHE_TTL seconds."""
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    jwks_url = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"
    try:
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = now
        logger.debug(f"Fetched JWKS from {jwks_url}")
    except httpx.HTTPError as e:
        # Stale keys beat no keys
        logger.warning(f"Failed to fetch JWKS: {e}")

    return _jwks_cache or {"keys": []}


def _get_signing_key(token: str) -> tuple[str | dict, str]:
    """
    Pick the verification key for a token from its header.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = header.get("alg", "HS256")
    kid = header.get("kid")

    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"No JWKS key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def decode_access_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and extract the user.

    Raises:
        HTTPException: 401 if the token is invalid, expired or has no user id
    """
    try:
        signing_key, algorithm = _get_signing_key(token)
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience="authenticated",
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    try:
        user_uuid = UUID(user_id)
    except (TypeError, ValueError):
        logger.warning(f"Invalid user id in token: {user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: malformed user ID",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthUser(id=user_uuid, email=payload.get("email"), access_token=token)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from the Bearer token.

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    user = decode_access_token(credentials.credentials)
    logger.debug(f"Authenticated user: {user.id}")
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> Optional[AuthUser]:
    """
    Optionally get the current user.

    Returns None if no token is provided or the token is invalid, so
    public endpoints can still tailor responses to signed-in users.
    """
    if credentials is None:
        return None

    try:
        return decode_access_token(credentials.credentials)
    except HTTPException:
        return None


async def get_current_user_with_role(
    user: AuthUser = Depends(get_current_user)
) -> AuthUser:
    """
    Authenticated user with `role` filled in from the profiles table.

    The role is read per request, so promotions take effect without
    re-login.
    """
    role = AuthService.get_role(str(user.id))
    return user.model_copy(update={"role": role})


async def get_current_user_optional_with_role(
    user: Optional[AuthUser] = Depends(get_current_user_optional)
) -> Optional[AuthUser]:
    """Like get_current_user_optional, with `role` filled in for signed-in users."""
    if user is None:
        return None
    return user.model_copy(update={"role": AuthService.get_role(str(user.id))})


def require_role(*roles: UserRole):
    """
    Build a dependency that only lets users with one of `roles` through.

    Usage:
        admin_only = require_role(UserRole.ADMIN)

        @router.get("/admin/stats")
        async def stats(user: AuthUser = Depends(admin_only)):
            ...
    """
    allowed = {role.value for role in roles}

    async def _check_role(user: AuthUser = Depends(get_current_user_with_role)) -> AuthUser:
        if user.role.value not in allowed:
            logger.info(f"User {user.id} with role {user.role.value} denied; needs {sorted(allowed)}")
            raise PermissionDeniedError("role check", required=sorted(allowed))
        return user

    return _check_role


require_uploader = require_role(UserRole.UPLOADER, UserRole.ADMIN)
require_admin = require_role(UserRole.ADMIN)
