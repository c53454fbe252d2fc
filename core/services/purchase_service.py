# =============================================================================
# core/services/purchase_service.py - Purchase Business Logic
# =============================================================================
# Purchases are recorded in the `transactions` table. Payment itself is
# mocked: paid purchases stay pending until their status is updated.
# =============================================================================

import logging

from app.exceptions import (
    AlreadyPurchasedError,
    PurchaseNotFoundError,
    ResourceNotFoundError,
)
from core.models.purchase import PaymentStatus, Purchase, PurchaseStats
from lib.stats import compute_purchase_stats
from lib.supabase_client import RESOURCES_TABLE, TRANSACTIONS_TABLE, SupabaseClient
from lib.utils import normalize_id

logger = logging.getLogger(__name__)


class PurchaseService:
    """Service for purchase operations."""

    @staticmethod
    def has_user_purchased(user_id: str, resource_id: str) -> bool:
        """True if the user has a completed purchase of the resource."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TRANSACTIONS_TABLE)
                .select("id")
                .eq("user_id", normalize_id(user_id))
                .eq("resource_id", normalize_id(resource_id))
                .eq("status", PaymentStatus.COMPLETED.value)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to check purchase: {e}")
            raise

        return bool(response.data)

    @staticmethod
    def create_purchase(user_id: str, resource_id: str) -> Purchase:
        """
        Buy a resource.

        The amount is the resource's current price. Free resources are
        completed immediately; paid ones start pending.

        Raises:
            ResourceNotFoundError: If the resource doesn't exist or isn't approved
            AlreadyPurchasedError: If the user already owns the resource
        """
        resource = SupabaseClient.fetch_by_id(
            RESOURCES_TABLE, resource_id, columns="id, price, approved"
        )
        if not resource or not resource.get("approved"):
            raise ResourceNotFoundError(resource_id)

        if PurchaseService.has_user_purchased(user_id, resource_id):
            raise AlreadyPurchasedError(resource_id)

        amount = float(resource.get("price") or 0)
        status = PaymentStatus.COMPLETED if amount == 0 else PaymentStatus.PENDING

        row = SupabaseClient.insert_row(TRANSACTIONS_TABLE, {
            "user_id": normalize_id(user_id),
            "resource_id": normalize_id(resource_id),
            "amount": amount,
            "status": status.value,
        })

        logger.info(
            f"Created purchase: {row['id']} user={user_id} "
            f"resource={resource_id} amount={amount} status={status.value}"
        )
        return Purchase.model_validate(row)

    @staticmethod
    def list_user_purchases(user_id: str) -> list[Purchase]:
        """All of a user's purchases, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TRANSACTIONS_TABLE)
                .select("*")
                .eq("user_id", normalize_id(user_id))
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list purchases: {e}")
            raise

        return [Purchase.model_validate(row) for row in response.data or []]

    @staticmethod
    def get_purchase(purchase_id: str, user_id: str | None = None) -> Purchase:
        """
        Get a purchase by ID.

        Raises:
            PurchaseNotFoundError: If missing or owned by another user
        """
        row = SupabaseClient.fetch_by_id(TRANSACTIONS_TABLE, purchase_id)
        if not row:
            raise PurchaseNotFoundError(purchase_id)

        if user_id and str(row.get("user_id")) != normalize_id(user_id):
            raise PurchaseNotFoundError(purchase_id)

        return Purchase.model_validate(row)

    @staticmethod
    def update_payment_status(
        purchase_id: str,
        status: PaymentStatus,
        payment_reference: str | None = None,
        user_id: str | None = None,
    ) -> Purchase:
        """
        Record the outcome of a (mock) payment.

        Raises:
            PurchaseNotFoundError: If missing or owned by another user
            AlreadyPurchasedError: If completing it would give the buyer a
                second completed purchase of the same resource
        """
        purchase = PurchaseService.get_purchase(purchase_id, user_id=user_id)

        if (
            status == PaymentStatus.COMPLETED
            and purchase.status != PaymentStatus.COMPLETED
            and PurchaseService.has_user_purchased(purchase.user_id, purchase.resource_id)
        ):
            logger.info(
                f"Refusing to complete purchase {purchase_id}: "
                f"user {purchase.user_id} already owns {purchase.resource_id}"
            )
            raise AlreadyPurchasedError(purchase.resource_id)

        update_data = {"status": status.value}
        if payment_reference:
            update_data["payment_reference"] = payment_reference

        row = SupabaseClient.update_row(TRANSACTIONS_TABLE, purchase_id, update_data)
        if not row:
            return purchase

        logger.info(f"Purchase {purchase_id} status: {purchase.status.value} -> {status.value}")
        return Purchase.model_validate(row)

    @staticmethod
    def get_purchase_stats() -> PurchaseStats:
        """Sales summary across all purchases (admin dashboard)."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TRANSACTIONS_TABLE)
                .select("status, amount, resources(category)")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch purchase stats: {e}")
            raise

        return compute_purchase_stats(response.data or [])
