# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication and role checks using Supabase Auth.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    get_current_user,
    get_current_user_optional,
    get_current_user_optional_with_role,
    get_current_user_with_role,
    require_admin,
    require_role,
    require_uploader,
)
from app.auth.models import AuthUser

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "get_current_user_optional_with_role",
    "get_current_user_with_role",
    "require_admin",
    "require_role",
    "require_uploader",
    "AuthUser",
]
