# =============================================================================
# app/routers/admin.py - Moderation & Dashboard Endpoints
# =============================================================================
# Admin-only: approve or reject uploads and view sales stats.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, require_admin
from core.models.purchase import PurchaseStats
from core.models.resource import Resource
from core.services.purchase_service import PurchaseService
from core.services.resource_service import ResourceService

logger = logging.getLogger(__name__)

router = APIRouter()

ResourceId = Annotated[str, Path(description="Resource ID")]


@router.get("/resources/pending", response_model=list[Resource])
async def list_pending_resources(user: AuthUser = Depends(require_admin)) -> list[Resource]:
    """Uploads awaiting approval, oldest first."""
    return ResourceService.list_pending()


@router.post("/resources/{resource_id}/approve", response_model=Resource)
async def approve_resource(
    resource_id: ResourceId,
    user: AuthUser = Depends(require_admin),
) -> Resource:
    """Publish an upload to the catalog."""
    logger.info(f"Admin {user.id} approving resource {resource_id}")
    return ResourceService.approve_resource(resource_id)


@router.post("/resources/{resource_id}/reject")
async def reject_resource(
    resource_id: ResourceId,
    user: AuthUser = Depends(require_admin),
) -> dict:
    """Reject an upload; its file and row are deleted."""
    logger.info(f"Admin {user.id} rejecting resource {resource_id}")
    ResourceService.reject_resource(resource_id)
    return {"resource_id": resource_id, "message": "Resource rejected"}


@router.get("/stats/purchases", response_model=PurchaseStats)
async def get_purchase_stats(user: AuthUser = Depends(require_admin)) -> PurchaseStats:
    """Revenue and purchase counts by status and category."""
    return PurchaseService.get_purchase_stats()
