# =============================================================================
# app/routers/samples.py - Sample Catalog Endpoints
# =============================================================================
# Serves the bundled demo catalog through the same browse pipeline as the
# live catalog, so the search page works without a Supabase project.
# =============================================================================

import json
import logging
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from app.dependencies import FiltersDep, PaginationDep
from core.models.resource import Resource, ResourceList
from lib.catalog import browse

logger = logging.getLogger(__name__)

router = APIRouter()

# Path to sample data directory
SAMPLE_DATA_DIR = Path(__file__).parent.parent.parent / "sample_data"
SAMPLE_CATALOG_FILE = "resources.json"


@lru_cache
def load_sample_resources() -> tuple[Resource, ...]:
    """
    Load the sample catalog from disk (cached after the first call).

    Raises:
        HTTPException: 404 if the file is missing, 500 if it can't be parsed
    """
    catalog_path = SAMPLE_DATA_DIR / SAMPLE_CATALOG_FILE

    if not catalog_path.exists():
        raise HTTPException(status_code=404, detail="Sample catalog not found")

    try:
        with open(catalog_path) as f:
            data = json.load(f)
        return tuple(Resource.model_validate(item) for item in data["resources"])
    except (OSError, KeyError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to load sample catalog: {e}")
        raise HTTPException(status_code=500, detail="Failed to load sample data")


@router.get("/samples/resources", response_model=ResourceList)
async def browse_sample_resources(
    filters: FiltersDep,
    pagination: PaginationDep,
) -> ResourceList:
    """
    Browse the sample catalog.

    Accepts the same filter, sort and page parameters as GET /resources.
    """
    return browse(
        load_sample_resources(),
        filters,
        page=pagination.page,
        page_size=pagination.page_size,
    )
