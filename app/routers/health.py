# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Liveness, readiness (Supabase database + storage) and a basic status probe.
# =============================================================================

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.config import settings
from lib.supabase_client import RESOURCES_TABLE, SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str
    environment: str
    version: str


class ReadinessChecks(BaseModel):
    """Per-dependency status: "healthy" or "unhealthy: <reason>"."""
    database: str
    storage: str


class ReadinessResponse(BaseModel):
    status: str
    checks: ReadinessChecks
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _probe(name: str, check: Callable[[], object]) -> str:
    try:
        check()
        return "healthy"
    except Exception as e:
        logger.warning(f"Readiness check '{name}' failed: {e}")
        return f"unhealthy: {str(e)[:50]}"


def _check_database() -> None:
    SupabaseClient.get_client().table(RESOURCES_TABLE).select("id").limit(1).execute()


def _check_storage() -> None:
    SupabaseClient.get_client().storage.list_buckets()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        service="collegemate-api",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Whether Supabase is reachable.

    Reports "degraded" instead of an error status so the process stays in
    rotation while the backend recovers.
    """
    checks = ReadinessChecks(
        database=_probe("database", _check_database),
        storage=_probe("storage", _check_storage),
    )
    ready = checks.database == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live")
async def liveness_check() -> dict:
    """The process is up."""
    return {"status": "alive", "timestamp": _now()}
