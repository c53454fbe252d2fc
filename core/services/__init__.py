# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .purchase_service import PurchaseService
from .resource_service import ResourceService
from .review_service import ReviewService
from .storage_service import StorageService
from .wishlist_service import WishlistService

__all__ = [
    "AuthService",
    "PurchaseService",
    "ResourceService",
    "ReviewService",
    "StorageService",
    "WishlistService",
]
