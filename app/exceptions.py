# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where possible, a
# suggestion telling the caller how to fix it.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class CollegeMateException(Exception):
    """
    Base exception for the CollegeMate API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "COLLEGEMATE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Not Found Exceptions
# =============================================================================

class ResourceNotFoundError(CollegeMateException):
    """Raised when a resource ID doesn't exist or isn't visible to the caller."""

    def __init__(self, resource_id: str):
        super().__init__(
            message=f"Resource not found: {resource_id}",
            code="RESOURCE_NOT_FOUND",
            status_code=404,
            suggestion="Check that the resource_id is correct and the resource has been approved",
            details={"resource_id": resource_id}
        )


class PurchaseNotFoundError(CollegeMateException):
    """Raised when a purchase ID doesn't exist or belongs to another user."""

    def __init__(self, purchase_id: str):
        super().__init__(
            message=f"Purchase not found: {purchase_id}",
            code="PURCHASE_NOT_FOUND",
            status_code=404,
            details={"purchase_id": purchase_id}
        )


class ReviewNotFoundError(CollegeMateException):
    """Raised when a review ID doesn't exist."""

    def __init__(self, review_id: str):
        super().__init__(
            message=f"Review not found: {review_id}",
            code="REVIEW_NOT_FOUND",
            status_code=404,
            details={"review_id": review_id}
        )


class ProfileNotFoundError(CollegeMateException):
    """Raised when an authenticated user has no profile row yet."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"Profile not found for user: {user_id}",
            code="PROFILE_NOT_FOUND",
            status_code=404,
            suggestion="Complete sign-up to create a profile",
            details={"user_id": user_id}
        )


# =============================================================================
# Auth & Permission Exceptions
# =============================================================================

class AuthenticationError(CollegeMateException):
    """Raised when Supabase Auth rejects a sign-in, sign-up or reset."""

    def __init__(self, error: str, status_code: int = 401):
        super().__init__(
            message=f"Authentication failed: {error}",
            code="AUTH_FAILED",
            status_code=status_code,
            details={"error": error}
        )


class PermissionDeniedError(CollegeMateException):
    """Raised when the caller's role or ownership doesn't allow an action."""

    def __init__(self, action: str, required: list[str] | None = None):
        suggestion = None
        if required:
            suggestion = f"This action requires one of these roles: {', '.join(required)}"
        super().__init__(
            message=f"Permission denied: {action}",
            code="PERMISSION_DENIED",
            status_code=403,
            suggestion=suggestion,
            details={"action": action, "required_roles": required or []}
        )


# =============================================================================
# Marketplace Flow Exceptions
# =============================================================================

class AlreadyPurchasedError(CollegeMateException):
    """Raised when buying a resource the user already owns."""

    def __init__(self, resource_id: str):
        super().__init__(
            message=f"Resource already purchased: {resource_id}",
            code="ALREADY_PURCHASED",
            status_code=409,
            suggestion="Download the resource from your purchases instead",
            details={"resource_id": resource_id}
        )


class PurchaseRequiredError(CollegeMateException):
    """Raised when downloading a paid resource without a completed purchase."""

    def __init__(self, resource_id: str):
        super().__init__(
            message=f"Purchase required to download resource: {resource_id}",
            code="PURCHASE_REQUIRED",
            status_code=402,
            suggestion="Buy the resource with POST /purchases first",
            details={"resource_id": resource_id}
        )


class DuplicateReviewError(CollegeMateException):
    """Raised when a user reviews the same resource twice."""

    def __init__(self, resource_id: str):
        super().__init__(
            message=f"You have already reviewed resource: {resource_id}",
            code="DUPLICATE_REVIEW",
            status_code=409,
            suggestion="Edit your existing review with PATCH /reviews/{id}",
            details={"resource_id": resource_id}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(CollegeMateException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(CollegeMateException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class StorageUploadError(CollegeMateException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def collegemate_exception_handler(
    request: Request,
    exc: CollegeMateException
) -> JSONResponse:
    """
    Convert CollegeMateException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def application_error_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Convert errors raised below the HTTP layer (lib/) to JSON responses.

    Backend failures map to 502; invalid catalog parameters map to 400.
    """
    code = getattr(exc, "code", "APPLICATION_ERROR")
    status_code = 400 if code == "INVALID_FILTER" else 502

    content = {
        "detail": getattr(exc, "message", str(exc)),
        "code": code,
    }
    suggestion = getattr(exc, "suggestion", None)
    if suggestion:
        content["suggestion"] = suggestion
    details = getattr(exc, "details", None)
    if details:
        content["details"] = details

    return JSONResponse(status_code=status_code, content=content)
