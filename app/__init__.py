# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# HTTP layer of the CollegeMate marketplace API:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - auth/: Supabase JWT verification, role guards and account endpoints
# - routers/: Catalog, purchase, review, wishlist and admin endpoints
#
# Routers stay thin and delegate business rules to core/services.
# =============================================================================

__version__ = "1.0.0"
