# =============================================================================
# core/services/wishlist_service.py - Wishlist Business Logic
# =============================================================================

import logging

from core.models.wishlist import WishlistItem
from core.services.resource_service import ResourceService
from lib.supabase_client import WISHLIST_TABLE, SupabaseClient
from lib.utils import normalize_id

logger = logging.getLogger(__name__)


class WishlistService:
    """Service for a user's saved resources."""

    @staticmethod
    def get_item(user_id: str, resource_id: str) -> WishlistItem | None:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(WISHLIST_TABLE)
                .select("*")
                .eq("user_id", normalize_id(user_id))
                .eq("resource_id", normalize_id(resource_id))
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch wishlist item: {e}")
            raise

        rows = response.data or []
        return WishlistItem.model_validate(rows[0]) if rows else None

    @staticmethod
    def contains(user_id: str, resource_id: str) -> bool:
        return WishlistService.get_item(user_id, resource_id) is not None

    @staticmethod
    def add(user_id: str, resource_id: str) -> WishlistItem:
        """
        Save a resource. Adding an already-saved resource returns the
        existing item.

        Raises:
            ResourceNotFoundError: If the resource doesn't exist or is pending
                and the caller isn't its uploader
        """
        ResourceService.get_resource(resource_id, user_id=user_id)

        existing = WishlistService.get_item(user_id, resource_id)
        if existing:
            return existing

        row = SupabaseClient.insert_row(WISHLIST_TABLE, {
            "user_id": normalize_id(user_id),
            "resource_id": normalize_id(resource_id),
        })
        logger.info(f"Added resource {resource_id} to wishlist of {user_id}")
        return WishlistItem.model_validate(row)

    @staticmethod
    def remove(user_id: str, resource_id: str) -> bool:
        """
        Unsave a resource.

        Returns:
            True if an item was removed
        """
        existing = WishlistService.get_item(user_id, resource_id)
        if not existing:
            return False

        SupabaseClient.delete_row(WISHLIST_TABLE, existing.id)
        logger.info(f"Removed resource {resource_id} from wishlist of {user_id}")
        return True

    @staticmethod
    def toggle(user_id: str, resource_id: str) -> bool:
        """
        Flip a resource's wishlist state.

        Returns:
            True if the resource is saved after the call
        """
        if WishlistService.remove(user_id, resource_id):
            return False
        WishlistService.add(user_id, resource_id)
        return True

    @staticmethod
    def list_items(user_id: str) -> list[WishlistItem]:
        """The user's saved resources, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(WISHLIST_TABLE)
                .select("*")
                .eq("user_id", normalize_id(user_id))
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list wishlist: {e}")
            raise

        return [WishlistItem.model_validate(row) for row in response.data or []]
