# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# Pydantic schemas for data validation:
# - resource.py: Resources, catalog filters and result pages
# - user.py: Profiles, roles and auth payloads
# - purchase.py: Purchases, payment status and sales stats
# - review.py: Reviews and rating stats
# - wishlist.py: Saved resources
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Resource Models - Catalog entries and browsing
# -----------------------------------------------------------------------------
from .resource import (
    ANY_VALUE,
    Resource,
    ResourceCategory,
    ResourceCreate,
    ResourceList,
    ResourceUpdate,
    SearchFilters,
    SortOption,
)

# -----------------------------------------------------------------------------
# User Models - Accounts and roles
# -----------------------------------------------------------------------------
from .user import (
    AuthSession,
    OAuthProvider,
    OAuthRedirect,
    PasswordResetRequest,
    PasswordUpdateRequest,
    Profile,
    ProfileUpdate,
    SignInRequest,
    SignUpRequest,
    UserRole,
)

# -----------------------------------------------------------------------------
# Purchase Models - Mock checkout
# -----------------------------------------------------------------------------
from .purchase import (
    PaymentStatus,
    PaymentStatusUpdate,
    Purchase,
    PurchaseCreate,
    PurchaseStats,
)

# -----------------------------------------------------------------------------
# Review & Wishlist Models
# -----------------------------------------------------------------------------
from .review import Review, ReviewCreate, ReviewStats, ReviewUpdate
from .wishlist import WishlistItem, WishlistToggleResponse

__all__ = [
    # Resource
    "ANY_VALUE",
    "Resource",
    "ResourceCategory",
    "ResourceCreate",
    "ResourceList",
    "ResourceUpdate",
    "SearchFilters",
    "SortOption",
    # User
    "AuthSession",
    "OAuthProvider",
    "OAuthRedirect",
    "PasswordResetRequest",
    "PasswordUpdateRequest",
    "Profile",
    "ProfileUpdate",
    "SignInRequest",
    "SignUpRequest",
    "UserRole",
    # Purchase
    "PaymentStatus",
    "PaymentStatusUpdate",
    "Purchase",
    "PurchaseCreate",
    "PurchaseStats",
    # Review / Wishlist
    "Review",
    "ReviewCreate",
    "ReviewStats",
    "ReviewUpdate",
    "WishlistItem",
    "WishlistToggleResponse",
]
