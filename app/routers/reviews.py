# =============================================================================
# app/routers/reviews.py - Review Endpoints
# =============================================================================
# Per-resource reviews live under /resources/{id}/reviews; edits and
# cross-resource listing live under /reviews.
# =============================================================================

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import (
    AuthUser,
    get_current_user,
    get_current_user_optional_with_role,
    get_current_user_with_role,
)
from core.models.review import Review, ReviewCreate, ReviewStats, ReviewUpdate
from core.services.review_service import ReviewService

router = APIRouter()


@router.get("/resources/{resource_id}/reviews", response_model=list[Review])
async def list_resource_reviews(
    resource_id: Annotated[str, Path(description="Resource ID")],
    user: Optional[AuthUser] = Depends(get_current_user_optional_with_role),
) -> list[Review]:
    """Reviews of a resource, newest first, with each reviewer's name."""
    return ReviewService.list_reviews(
        resource_id=resource_id,
        user_id=str(user.id) if user else None,
        is_admin=bool(user and user.is_admin),
    )


@router.get("/resources/{resource_id}/reviews/stats", response_model=ReviewStats)
async def get_resource_review_stats(
    resource_id: Annotated[str, Path(description="Resource ID")],
    user: Optional[AuthUser] = Depends(get_current_user_optional_with_role),
) -> ReviewStats:
    """Average rating (one decimal) and star distribution."""
    return ReviewService.get_review_stats(
        resource_id,
        user_id=str(user.id) if user else None,
        is_admin=bool(user and user.is_admin),
    )


@router.get("/resources/{resource_id}/reviews/mine", response_model=Optional[Review])
async def get_my_review(
    resource_id: Annotated[str, Path(description="Resource ID")],
    user: AuthUser = Depends(get_current_user),
) -> Optional[Review]:
    """The caller's review of a resource, or null."""
    return ReviewService.get_user_review(str(user.id), resource_id)


@router.post(
    "/resources/{resource_id}/reviews",
    response_model=Review,
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    resource_id: Annotated[str, Path(description="Resource ID")],
    request: ReviewCreate,
    user: AuthUser = Depends(get_current_user),
) -> Review:
    """Review a resource. One review per user per resource (409 otherwise)."""
    return ReviewService.create_review(str(user.id), resource_id, request)


@router.get("/reviews", response_model=list[Review])
async def list_reviews(
    resource_id: Annotated[Optional[str], Query()] = None,
    rating: Annotated[Optional[int], Query(ge=1, le=5)] = None,
    user: Optional[AuthUser] = Depends(get_current_user_optional_with_role),
) -> list[Review]:
    """Reviews filtered by resource and/or star rating, newest first."""
    return ReviewService.list_reviews(
        resource_id=resource_id,
        rating=rating,
        user_id=str(user.id) if user else None,
        is_admin=bool(user and user.is_admin),
    )


@router.patch("/reviews/{review_id}", response_model=Review)
async def update_review(
    review_id: Annotated[str, Path(description="Review ID")],
    request: ReviewUpdate,
    user: AuthUser = Depends(get_current_user),
) -> Review:
    """Edit your own review."""
    return ReviewService.update_review(review_id, str(user.id), request)


@router.delete("/reviews/{review_id}")
async def delete_review(
    review_id: Annotated[str, Path(description="Review ID")],
    user: AuthUser = Depends(get_current_user_with_role),
) -> dict:
    """Delete your own review (admins may delete any)."""
    ReviewService.delete_review(review_id, str(user.id), is_admin=user.is_admin)
    return {"review_id": review_id, "message": "Review deleted successfully"}
