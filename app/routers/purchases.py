# =============================================================================
# app/routers/purchases.py - Purchase Endpoints
# =============================================================================
# Buying is mocked: POST /purchases records the purchase and
# POST /purchases/{id}/status stands in for the payment provider callback.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, get_current_user
from core.models.purchase import PaymentStatusUpdate, Purchase, PurchaseCreate
from core.services.purchase_service import PurchaseService

router = APIRouter()


@router.post("", response_model=Purchase, status_code=status.HTTP_201_CREATED)
async def create_purchase(
    request: PurchaseCreate,
    user: AuthUser = Depends(get_current_user),
) -> Purchase:
    """
    Buy a resource.

    Free resources complete immediately; paid resources start pending.
    """
    return PurchaseService.create_purchase(str(user.id), request.resource_id)


@router.get("", response_model=list[Purchase])
async def list_purchases(user: AuthUser = Depends(get_current_user)) -> list[Purchase]:
    """The caller's purchases, newest first."""
    return PurchaseService.list_user_purchases(str(user.id))


@router.get("/check/{resource_id}")
async def check_purchase(
    resource_id: Annotated[str, Path(description="Resource ID")],
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """Whether the caller has a completed purchase of a resource."""
    return {
        "resource_id": resource_id,
        "has_purchased": PurchaseService.has_user_purchased(str(user.id), resource_id),
    }


@router.get("/{purchase_id}", response_model=Purchase)
async def get_purchase(
    purchase_id: Annotated[str, Path(description="Purchase ID")],
    user: AuthUser = Depends(get_current_user),
) -> Purchase:
    return PurchaseService.get_purchase(purchase_id, user_id=str(user.id))


@router.post("/{purchase_id}/status", response_model=Purchase)
async def update_payment_status(
    purchase_id: Annotated[str, Path(description="Purchase ID")],
    request: PaymentStatusUpdate,
    user: AuthUser = Depends(get_current_user),
) -> Purchase:
    """Record the payment outcome of one of the caller's purchases."""
    return PurchaseService.update_payment_status(
        purchase_id,
        request.status,
        payment_reference=request.payment_reference,
        user_id=str(user.id),
    )
