# =============================================================================
# core/services/review_service.py - Review Business Logic
# =============================================================================
# One review per user per resource. Every write refreshes the resource's
# denormalized `rating` and `review_count` columns so the catalog can sort
# by rating without joining reviews.
#
# Reviews of a pending resource are only reachable by its uploader and
# admins, the same rule ResourceService.get_resource applies.
# =============================================================================

import logging

from app.exceptions import (
    DuplicateReviewError,
    PermissionDeniedError,
    ReviewNotFoundError,
)
from core.models.review import Review, ReviewCreate, ReviewStats, ReviewUpdate
from core.services.resource_service import ResourceService
from lib.stats import compute_review_stats
from lib.supabase_client import RESOURCES_TABLE, REVIEWS_TABLE, SupabaseClient
from lib.utils import normalize_id

logger = logging.getLogger(__name__)

# Review columns plus the author's name from profiles (reviews.user_id FK)
REVIEW_COLUMNS = "*, profiles:user_id(full_name)"


class ReviewService:
    """Service for review operations."""

    @staticmethod
    def get_user_review(user_id: str, resource_id: str) -> Review | None:
        """The user's review of a resource, if any."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(REVIEWS_TABLE)
                .select(REVIEW_COLUMNS)
                .eq("user_id", normalize_id(user_id))
                .eq("resource_id", normalize_id(resource_id))
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch user review: {e}")
            raise

        rows = response.data or []
        return Review.model_validate(rows[0]) if rows else None

    @staticmethod
    def create_review(user_id: str, resource_id: str, data: ReviewCreate) -> Review:
        """
        Review a resource.

        Raises:
            ResourceNotFoundError: If the resource doesn't exist or is
                pending and the caller isn't its uploader
            DuplicateReviewError: If the user already reviewed it
        """
        ResourceService.get_resource(resource_id, user_id=user_id)

        if ReviewService.get_user_review(user_id, resource_id):
            raise DuplicateReviewError(resource_id)

        row = SupabaseClient.insert_row(REVIEWS_TABLE, {
            "user_id": normalize_id(user_id),
            "resource_id": normalize_id(resource_id),
            "rating": data.rating,
            "comment": data.comment,
        })
        logger.info(f"Created review: {row['id']} for resource: {resource_id}")

        ReviewService.refresh_resource_rating(resource_id)
        # Re-read so the response carries the reviewer name
        return ReviewService.get_user_review(user_id, resource_id) or Review.model_validate(row)

    @staticmethod
    def list_reviews(
        resource_id: str | None = None,
        rating: int | None = None,
        user_id: str | None = None,
        is_admin: bool = False,
    ) -> list[Review]:
        """
        Reviews matching the optional filters, newest first.

        Without a resource_id, non-admins only see reviews of approved
        resources.

        Raises:
            ResourceNotFoundError: If resource_id names a resource the
                caller can't see
        """
        client = SupabaseClient.get_client()

        if resource_id:
            ResourceService.get_resource(resource_id, user_id=user_id, is_admin=is_admin)
            query = client.table(REVIEWS_TABLE).select(REVIEW_COLUMNS)
            query = query.eq("resource_id", normalize_id(resource_id))
        elif is_admin:
            query = client.table(REVIEWS_TABLE).select(REVIEW_COLUMNS)
        else:
            query = (
                client.table(REVIEWS_TABLE)
                .select(f"{REVIEW_COLUMNS}, resources!inner(approved)")
                .eq("resources.approved", True)
            )

        if rating:
            query = query.eq("rating", rating)

        try:
            response = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Failed to list reviews: {e}")
            raise

        return [Review.model_validate(row) for row in response.data or []]

    @staticmethod
    def get_review(review_id: str) -> Review:
        row = SupabaseClient.fetch_by_id(REVIEWS_TABLE, review_id, columns=REVIEW_COLUMNS)
        if not row:
            raise ReviewNotFoundError(review_id)
        return Review.model_validate(row)

    @staticmethod
    def update_review(review_id: str, user_id: str, updates: ReviewUpdate) -> Review:
        """
        Edit a review. Only its author may do this.

        Raises:
            ReviewNotFoundError: If the review doesn't exist
            PermissionDeniedError: If the caller didn't write it
        """
        review = ReviewService.get_review(review_id)
        if review.user_id != normalize_id(user_id):
            raise PermissionDeniedError("edit review")

        update_data = updates.to_update_dict()
        if not update_data:
            return review

        row = SupabaseClient.update_row(REVIEWS_TABLE, review_id, update_data)
        if not row:
            raise ReviewNotFoundError(review_id)

        if "rating" in update_data:
            ReviewService.refresh_resource_rating(review.resource_id)

        logger.info(f"Updated review: {review_id}")
        return Review.model_validate({**row, "reviewer_name": review.reviewer_name})

    @staticmethod
    def delete_review(review_id: str, user_id: str, is_admin: bool = False) -> None:
        """
        Delete a review. Authors may delete their own; admins any.

        Raises:
            ReviewNotFoundError: If the review doesn't exist
            PermissionDeniedError: If the caller may not delete it
        """
        review = ReviewService.get_review(review_id)
        if not is_admin and review.user_id != normalize_id(user_id):
            raise PermissionDeniedError("delete review")

        SupabaseClient.delete_row(REVIEWS_TABLE, review_id)
        ReviewService.refresh_resource_rating(review.resource_id)
        logger.info(f"Deleted review: {review_id}")

    @staticmethod
    def get_review_stats(
        resource_id: str,
        user_id: str | None = None,
        is_admin: bool = False,
    ) -> ReviewStats:
        """
        Average rating and star distribution for a resource.

        Raises:
            ResourceNotFoundError: If the caller can't see the resource
        """
        ResourceService.get_resource(resource_id, user_id=user_id, is_admin=is_admin)
        return ReviewService._compute_stats(resource_id)

    @staticmethod
    def _compute_stats(resource_id: str) -> ReviewStats:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(REVIEWS_TABLE)
                .select("rating")
                .eq("resource_id", normalize_id(resource_id))
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch review stats: {e}")
            raise

        return compute_review_stats(row["rating"] for row in response.data or [])

    @staticmethod
    def refresh_resource_rating(resource_id: str) -> ReviewStats:
        """Copy the current review stats onto the resource row."""
        stats = ReviewService._compute_stats(resource_id)
        SupabaseClient.update_row(RESOURCES_TABLE, resource_id, {
            "rating": stats.average_rating,
            "review_count": stats.total_reviews,
        })
        logger.debug(
            f"Resource {resource_id} rating={stats.average_rating} "
            f"reviews={stats.total_reviews}"
        )
        return stats
