# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from core.models.user import UserRole


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    `role` is only filled in by role-checking dependencies, which read it
    from the profiles table.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    access_token: Optional[str] = None
    role: Optional[UserRole] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

