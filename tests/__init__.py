# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the CollegeMate API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_catalog.py / test_stats.py / test_utils.py: Pure helpers in lib/
# - test_*_service.py: Services with mocked Supabase
# - test_auth.py: Token verification and role guards
# - test_api.py: Endpoints through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
