# =============================================================================
# core/models/wishlist.py - Wishlist Schemas
# =============================================================================

from datetime import datetime

from pydantic import BaseModel


class WishlistItem(BaseModel):
    id: str
    user_id: str
    resource_id: str
    created_at: datetime | None = None


class WishlistToggleResponse(BaseModel):
    """State of a resource in the caller's wishlist after a toggle."""

    resource_id: str
    in_wishlist: bool
