# =============================================================================
# core/models/purchase.py - Purchase Schemas
# =============================================================================
# Purchases are rows of the `transactions` table. Payment is mocked: a
# purchase starts pending and is confirmed through a status update.
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class PaymentStatus(str, Enum):
    """
    Payment state of a purchase.

    Flow: pending -> completed | failed
    Free resources go straight to completed.
    """
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Purchase(BaseModel):
    id: str
    user_id: str
    resource_id: str
    amount: float = Field(default=0, ge=0)
    status: PaymentStatus = PaymentStatus.PENDING
    payment_reference: str | None = None
    created_at: datetime | None = None


class PurchaseCreate(BaseModel):
    resource_id: str = Field(..., min_length=1)


class PaymentStatusUpdate(BaseModel):
    status: PaymentStatus
    payment_reference: str | None = Field(default=None, max_length=255)


class PurchaseStats(BaseModel):
    """
    Marketplace sales summary for the admin dashboard.

    Only completed purchases count toward revenue and per-category counts.
    """

    total_revenue: float = 0
    total_purchases: int = 0
    pending_purchases: int = 0
    failed_purchases: int = 0
    category_counts: dict[str, int] = Field(default_factory=dict)
