# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# Marketplace configuration (Supabase project, storage buckets, upload
# limits, catalog paging) read by pydantic-settings from the process
# environment, falling back to a .env file in the working directory.
#
# Usage:
#   from app.config import settings
#   bucket = settings.bucket_names["notes"]
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    CollegeMate settings.

    Only the three Supabase credentials are required; everything else has a
    development default. Import the module-level `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Auth, Postgres tables and file storage all live in one Supabase project

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key (used for sign-in/sign-up)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret for verifying access tokens"
    )

    # -------------------------------------------------------------------------
    # Storage Buckets
    # -------------------------------------------------------------------------
    # One bucket per resource category

    NOTES_BUCKET: str = Field(default="notes_files")
    SYLLABUS_BUCKET: str = Field(default="syllabus_files")
    PAPERS_BUCKET: str = Field(default="papers_files")

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment (controls CORS strictness)"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Bind address for uvicorn"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Bind port for uvicorn"
    )

    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Front-end origins allowed in production (comma-separated)"
    )

    AUTH_REDIRECT_URL: str = Field(
        default="http://localhost:5173",
        description="Front-end origin used in password reset links"
    )

    # -------------------------------------------------------------------------
    # Upload Settings
    # -------------------------------------------------------------------------

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=25,
        ge=1,
        le=200,
        description="Maximum resource file size in MB"
    )

    ALLOWED_EXTENSIONS: str = Field(
        default=".pdf,.doc,.docx,.ppt,.pptx,.png,.jpg,.jpeg",
        description="Allowed resource file extensions (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Catalog Settings
    # -------------------------------------------------------------------------

    DEFAULT_PAGE_SIZE: int = Field(default=12, ge=1, le=100)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1, le=500)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:5173, https://collegemate.app"
            -> ["http://localhost:5173", "https://collegemate.app"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def allowed_extensions_list(self) -> list[str]:
        """Parse ALLOWED_EXTENSIONS into a lowercase list."""
        return [ext.strip().lower() for ext in self.ALLOWED_EXTENSIONS.split(",")]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def bucket_names(self) -> dict[str, str]:
        """Map resource category value -> storage bucket name."""
        return {
            "notes": self.NOTES_BUCKET,
            "syllabus": self.SYLLABUS_BUCKET,
            "papers": self.PAPERS_BUCKET,
        }

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
