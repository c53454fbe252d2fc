# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from typing import Any
from uuid import UUID


# =============================================================================
# ID Utilities
# =============================================================================

def normalize_id(value: str | UUID) -> str:
    """
    Normalize an ID to string format.

    Supabase returns IDs as strings, while FastAPI path params and JWT
    subjects arrive as UUID objects.

    Example:
        user_id = normalize_id(uuid_obj)  # "550e8400-..."
        user_id = normalize_id("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Storage Path Utilities
# =============================================================================

def build_storage_path(
    owner_id: str | UUID,
    filename: str,
    now: datetime | None = None,
) -> str:
    """
    Build an object path of the form {owner_id}/{epoch_millis}.{ext}.

    The original filename is not kept in the path; only its extension.

    Example:
        build_storage_path("u1", "DSA notes.PDF")  # "u1/1716200000000.pdf"
    """
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"{normalize_id(owner_id)}/{millis}{file_extension(filename)}"


def file_extension(filename: str) -> str:
    """Lowercase extension with the leading dot, or "" when there is none."""
    if "." not in filename:
        return ""
    return "." + filename.rsplit(".", 1)[-1].lower()


def path_from_public_url(url: str) -> str:
    """
    Recover a storage object path from its public URL.

    Object paths are always two segments ({owner_id}/{file}), so the last
    two URL segments are the path.

    Example:
        ".../storage/v1/object/public/notes_files/u1/1716.pdf" -> "u1/1716.pdf"
    """
    segments = [s for s in url.split("?", 1)[0].split("/") if s]
    return "/".join(segments[-2:])


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for errors raised outside the HTTP layer.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
