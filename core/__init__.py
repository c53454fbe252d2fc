# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# Marketplace rules, independent of HTTP routing:
# - models/: Pydantic schemas for resources, users, purchases, reviews
# - services/: Supabase-backed operations (one service class per table)
# =============================================================================
