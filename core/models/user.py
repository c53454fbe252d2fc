# =============================================================================
# core/models/user.py - Profile & Auth Schemas
# =============================================================================
# Profiles live in the `profiles` table, keyed by the Supabase auth user id.
# Sign-up/sign-in payloads are forwarded to Supabase Auth.
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field


class UserRole(str, Enum):
    """
    Marketplace roles.

    - student: browse, buy, review
    - uploader: student + upload resources
    - admin: uploader + moderation and stats
    """
    STUDENT = "student"
    UPLOADER = "uploader"
    ADMIN = "admin"


class Profile(BaseModel):
    """A row of the `profiles` table."""

    id: str
    email: str | None = None
    full_name: str = ""
    role: UserRole = UserRole.STUDENT
    points: int = Field(default=0, ge=0)
    college: str | None = None
    branch: str | None = None
    year: int | None = Field(default=None, ge=1, le=6)
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdate(BaseModel):
    """User-editable profile fields. Role and points are admin-managed."""

    full_name: str | None = Field(default=None, min_length=1, max_length=120)
    college: str | None = Field(default=None, max_length=200)
    branch: str | None = Field(default=None, max_length=20)
    year: int | None = Field(default=None, ge=1, le=6)
    avatar_url: str | None = None


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=120)
    college: str | None = Field(default=None, max_length=200)
    branch: str | None = Field(default=None, max_length=20)
    year: int | None = Field(default=None, ge=1, le=6)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordUpdateRequest(BaseModel):
    new_password: str = Field(..., min_length=6, max_length=128)


class AuthSession(BaseModel):
    """
    Result of a successful sign-up or sign-in.

    Tokens are absent after sign-up when the project requires email
    confirmation before the first sign-in.
    """

    user_id: str
    email: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: int | None = None


class OAuthProvider(str, Enum):
    """Identity providers enabled for social sign-in."""
    GOOGLE = "google"


class OAuthRedirect(BaseModel):
    """Where to send the browser to start an OAuth sign-in."""

    provider: OAuthProvider
    url: str
