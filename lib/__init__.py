# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# Reusable pieces with no HTTP dependencies:
# - catalog.py: In-memory filter / sort / paginate for resource lists
# - stats.py: Purchase and review aggregates
# - supabase_client.py: Supabase client singleton and row helpers
# - utils.py: Shared utilities (error base class, storage paths)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError, normalize_id

__all__ = [
    "SupabaseClient",
    "SupabaseClientError",
    "ApplicationError",
    "normalize_id",
]
