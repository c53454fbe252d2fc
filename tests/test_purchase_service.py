# =============================================================================
# tests/test_purchase_service.py - Purchase Service Tests
# =============================================================================

from unittest.mock import patch

import pytest

from app.exceptions import AlreadyPurchasedError, PurchaseNotFoundError, ResourceNotFoundError
from core.models.purchase import PaymentStatus
from core.services.purchase_service import PurchaseService
from tests.conftest import OTHER_USER_ID, USER_ID, mock_query_chain


@pytest.fixture
def mock_supabase():
    with patch("core.services.purchase_service.SupabaseClient") as mock:
        mock.insert_row.side_effect = lambda table, row: {**row, "id": "txn-1"}
        yield mock


def purchase_row(**overrides):
    row = {
        "id": "txn-1",
        "user_id": USER_ID,
        "resource_id": "res-1",
        "amount": 299,
        "status": "pending",
        "payment_reference": None,
        "created_at": "2024-04-01T10:00:00+00:00",
    }
    row.update(overrides)
    return row


class TestHasUserPurchased:
    """Test PurchaseService.has_user_purchased."""

    def test_completed_purchase(self, mock_supabase):
        query = mock_query_chain(data=[{"id": "txn-1"}])
        mock_supabase.get_client.return_value = query

        assert PurchaseService.has_user_purchased(USER_ID, "res-1")
        query.eq.assert_any_call("status", "completed")

    def test_no_purchase(self, mock_supabase):
        mock_supabase.get_client.return_value = mock_query_chain(data=[])

        assert not PurchaseService.has_user_purchased(USER_ID, "res-1")


class TestCreatePurchase:
    """Test PurchaseService.create_purchase."""

    def test_paid_resource_starts_pending(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = {"id": "res-1", "price": 299, "approved": True}

        with patch.object(PurchaseService, "has_user_purchased", return_value=False):
            purchase = PurchaseService.create_purchase(USER_ID, "res-1")

        assert purchase.status == PaymentStatus.PENDING
        assert purchase.amount == 299
        table, row = mock_supabase.insert_row.call_args.args
        assert table == "transactions"
        assert row["user_id"] == USER_ID

    def test_free_resource_completes_immediately(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = {"id": "res-2", "price": 0, "approved": True}

        with patch.object(PurchaseService, "has_user_purchased", return_value=False):
            purchase = PurchaseService.create_purchase(USER_ID, "res-2")

        assert purchase.status == PaymentStatus.COMPLETED
        assert purchase.amount == 0

    def test_already_purchased(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = {"id": "res-1", "price": 299, "approved": True}

        with patch.object(PurchaseService, "has_user_purchased", return_value=True):
            with pytest.raises(AlreadyPurchasedError):
                PurchaseService.create_purchase(USER_ID, "res-1")

        mock_supabase.insert_row.assert_not_called()

    @pytest.mark.parametrize("row", [None, {"id": "res-1", "price": 10, "approved": False}])
    def test_missing_or_pending_resource(self, mock_supabase, row):
        mock_supabase.fetch_by_id.return_value = row

        with pytest.raises(ResourceNotFoundError):
            PurchaseService.create_purchase(USER_ID, "res-1")


class TestPaymentStatus:
    """Test get_purchase and update_payment_status."""

    def test_other_users_purchase_is_hidden(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = purchase_row(user_id=OTHER_USER_ID)

        with pytest.raises(PurchaseNotFoundError):
            PurchaseService.get_purchase("txn-1", user_id=USER_ID)

    def test_complete_payment(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = purchase_row()
        mock_supabase.update_row.return_value = purchase_row(
            status="completed", payment_reference="PAY-42"
        )

        with patch.object(PurchaseService, "has_user_purchased", return_value=False):
            purchase = PurchaseService.update_payment_status(
                "txn-1", PaymentStatus.COMPLETED, payment_reference="PAY-42", user_id=USER_ID
            )

        mock_supabase.update_row.assert_called_once_with(
            "transactions", "txn-1", {"status": "completed", "payment_reference": "PAY-42"}
        )
        assert purchase.status == PaymentStatus.COMPLETED

    def test_second_pending_purchase_cannot_complete(self, mock_supabase):
        """A user who already owns the resource can't complete another pending purchase of it."""
        mock_supabase.fetch_by_id.return_value = purchase_row(id="txn-2")

        with patch.object(PurchaseService, "has_user_purchased", return_value=True):
            with pytest.raises(AlreadyPurchasedError):
                PurchaseService.update_payment_status(
                    "txn-2", PaymentStatus.COMPLETED, user_id=USER_ID
                )

        mock_supabase.update_row.assert_not_called()

    def test_failing_a_pending_purchase_skips_ownership_check(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = purchase_row(id="txn-2")
        mock_supabase.update_row.return_value = purchase_row(id="txn-2", status="failed")

        with patch.object(PurchaseService, "has_user_purchased") as owned:
            purchase = PurchaseService.update_payment_status(
                "txn-2", PaymentStatus.FAILED, user_id=USER_ID
            )

        owned.assert_not_called()
        assert purchase.status == PaymentStatus.FAILED


class TestPurchaseStats:
    def test_aggregates_rows(self, mock_supabase):
        mock_supabase.get_client.return_value = mock_query_chain(data=[
            {"status": "completed", "amount": 299, "resources": {"category": "notes"}},
            {"status": "pending", "amount": 199, "resources": {"category": "papers"}},
        ])

        stats = PurchaseService.get_purchase_stats()

        assert stats.total_revenue == 299
        assert stats.pending_purchases == 1
        assert stats.category_counts == {"notes": 1}
