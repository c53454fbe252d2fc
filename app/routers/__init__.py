# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - resources.py: Catalog browse, upload, edit, delete and download
# - purchases.py: Mock checkout and purchase history
# - reviews.py: Ratings and reviews
# - wishlist.py: Saved resources
# - admin.py: Moderation queue and sales stats
# - samples.py: Bundled demo catalog
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import admin
from . import health
from . import purchases
from . import resources
from . import reviews
from . import samples
from . import wishlist

__all__ = [
    "admin",
    "health",
    "purchases",
    "resources",
    "reviews",
    "samples",
    "wishlist",
]
