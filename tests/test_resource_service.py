# =============================================================================
# tests/test_resource_service.py - Resource Service Tests
# =============================================================================
# This module contains tests for:
# - Visibility of pending resources
# - Catalog listing (query push-down + in-memory browse)
# - Upload validation and cleanup
# - Edit/delete permissions
# - Download access rules
#
# Tests use mocked Supabase responses to avoid database calls.
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    PermissionDeniedError,
    PurchaseRequiredError,
    ResourceNotFoundError,
)
from core.models.resource import ResourceCreate, ResourceUpdate, SearchFilters
from core.services.resource_service import ResourceService
from lib.supabase_client import SupabaseClientError
from tests.conftest import OTHER_USER_ID, USER_ID, make_resource_row, mock_query_chain


@pytest.fixture
def mock_supabase():
    with patch("core.services.resource_service.SupabaseClient") as mock:
        yield mock


@pytest.fixture
def mock_storage():
    with patch("core.services.resource_service.StorageService") as mock:
        yield mock


@pytest.fixture
def mock_purchases():
    with patch("core.services.resource_service.PurchaseService") as mock:
        mock.has_user_purchased.return_value = False
        yield mock


# =============================================================================
# get_resource Tests
# =============================================================================

class TestGetResource:
    """Test ResourceService.get_resource."""

    def test_approved_resource_is_public(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = make_resource_row()

        resource = ResourceService.get_resource("res-1")

        assert resource.id == "res-1"

    def test_missing_resource(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = None

        with pytest.raises(ResourceNotFoundError):
            ResourceService.get_resource("nope")

    def test_pending_resource_hidden_from_others(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = make_resource_row(approved=False)

        with pytest.raises(ResourceNotFoundError):
            ResourceService.get_resource("res-1", user_id=USER_ID)
        with pytest.raises(ResourceNotFoundError):
            ResourceService.get_resource("res-1")

    def test_pending_resource_visible_to_uploader_and_admin(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = make_resource_row(approved=False)

        assert ResourceService.get_resource("res-1", user_id=OTHER_USER_ID).id == "res-1"
        assert ResourceService.get_resource("res-1", user_id=USER_ID, is_admin=True).id == "res-1"


# =============================================================================
# list_resources Tests
# =============================================================================

class TestListResources:
    """Test ResourceService.list_resources."""

    def test_pushes_exact_filters_to_query(self, mock_supabase):
        query = mock_query_chain(data=[make_resource_row()])
        mock_supabase.get_client.return_value = query

        filters = SearchFilters(category="notes", semester="3", price_min=100, price_max=300)
        result = ResourceService.list_resources(filters, page=1, page_size=10)

        query.table.assert_called_with("resources")
        query.eq.assert_any_call("approved", True)
        query.eq.assert_any_call("category", "notes")
        query.eq.assert_any_call("semester", "3")
        query.gte.assert_called_once_with("price", 100)
        query.lte.assert_called_once_with("price", 300)
        assert result.total == 1

    def test_substring_filters_run_in_memory(self, mock_supabase):
        rows = [
            make_resource_row(id="a", subject="Computer Science"),
            make_resource_row(id="b", subject="Physics", title="Physics Papers",
                              description="Past papers"),
        ]
        mock_supabase.get_client.return_value = mock_query_chain(data=rows)

        result = ResourceService.list_resources(SearchFilters(subject="physics"))

        assert [r.id for r in result.items] == ["b"]

    def test_uses_default_page_size(self, mock_supabase):
        mock_supabase.get_client.return_value = mock_query_chain(data=[])

        result = ResourceService.list_resources()

        assert result.page_size == 12
        assert result.items == []

    def test_reads_catalog_in_windows(self, mock_supabase):
        query = mock_query_chain()
        query.execute.side_effect = [
            MagicMock(data=[make_resource_row(id="a"), make_resource_row(id="b")]),
            MagicMock(data=[make_resource_row(id="c")]),
        ]
        mock_supabase.get_client.return_value = query

        with patch("core.services.resource_service.CATALOG_FETCH_BATCH", 2):
            result = ResourceService.list_resources(page_size=10)

        assert [call.args for call in query.range.call_args_list] == [(0, 1), (2, 3)]
        assert result.total == 3

    def test_full_last_window_triggers_one_more_read(self, mock_supabase):
        query = mock_query_chain()
        query.execute.side_effect = [
            MagicMock(data=[make_resource_row(id="a"), make_resource_row(id="b")]),
            MagicMock(data=[]),
        ]
        mock_supabase.get_client.return_value = query

        with patch("core.services.resource_service.CATALOG_FETCH_BATCH", 2):
            result = ResourceService.list_resources()

        assert query.execute.call_count == 2
        assert result.total == 2


# =============================================================================
# Upload Tests
# =============================================================================

class TestCreateResource:
    """Test upload validation and resource creation."""

    def _data(self):
        return ResourceCreate(
            title="DBMS Notes",
            category="notes",
            subject="Databases",
            semester="4",
            year="2024",
            price=99,
        )

    def test_rejects_disallowed_extension(self):
        with pytest.raises(InvalidFileTypeError):
            ResourceService.validate_upload("malware.exe", 100)

    def test_rejects_oversized_file(self):
        with pytest.raises(FileTooLargeError):
            ResourceService.validate_upload("big.pdf", 26 * 1024 * 1024)

    def test_accepts_uppercase_extension(self):
        ResourceService.validate_upload("NOTES.PDF", 1024)

    def test_creates_pending_resource(self, mock_supabase, mock_storage):
        mock_storage.upload_file.return_value = f"{USER_ID}/1700000000000.pdf"
        mock_storage.get_public_url.return_value = "https://cdn/notes_files/u/1700000000000.pdf"
        mock_supabase.insert_row.side_effect = lambda table, row: {
            **row, "id": "new-1", "created_at": "2024-05-01T00:00:00+00:00",
        }

        resource = ResourceService.create_resource(
            USER_ID, self._data(), "dbms.pdf", b"%PDF-1.4", "application/pdf"
        )

        table, row = mock_supabase.insert_row.call_args.args
        assert table == "resources"
        assert row["approved"] is False
        assert row["uploader_id"] == USER_ID
        assert row["category"] == "notes"
        assert resource.file_url == "https://cdn/notes_files/u/1700000000000.pdf"
        assert resource.downloads == 0

    def test_removes_file_when_insert_fails(self, mock_supabase, mock_storage):
        mock_storage.upload_file.return_value = "u/1.pdf"
        mock_storage.get_public_url.return_value = "https://cdn/notes_files/u/1.pdf"
        mock_supabase.insert_row.side_effect = SupabaseClientError("insert failed")

        with pytest.raises(SupabaseClientError):
            ResourceService.create_resource(USER_ID, self._data(), "dbms.pdf", b"x")

        mock_storage.delete_file.assert_called_once()
        assert mock_storage.delete_file.call_args.args[1] == "u/1.pdf"


# =============================================================================
# Edit / Delete Tests
# =============================================================================

class TestModifyResource:
    """Test update and delete permissions."""

    def test_uploader_can_update(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = make_resource_row(uploader_id=USER_ID)
        mock_supabase.update_row.return_value = make_resource_row(uploader_id=USER_ID, price=0)

        resource = ResourceService.update_resource("res-1", ResourceUpdate(price=0), USER_ID)

        mock_supabase.update_row.assert_called_once_with("resources", "res-1", {"price": 0})
        assert resource.is_free

    def test_other_user_cannot_update(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = make_resource_row(uploader_id=OTHER_USER_ID)

        with pytest.raises(PermissionDeniedError):
            ResourceService.update_resource("res-1", ResourceUpdate(price=0), USER_ID)

        mock_supabase.update_row.assert_not_called()

    def test_empty_update_is_noop(self, mock_supabase):
        mock_supabase.fetch_by_id.return_value = make_resource_row(uploader_id=USER_ID)

        ResourceService.update_resource("res-1", ResourceUpdate(), USER_ID)

        mock_supabase.update_row.assert_not_called()

    def test_admin_can_delete(self, mock_supabase, mock_storage):
        row = make_resource_row(uploader_id=OTHER_USER_ID)
        mock_supabase.fetch_by_id.return_value = row

        ResourceService.delete_resource("res-1", USER_ID, is_admin=True)

        mock_storage.delete_by_url.assert_called_once()
        mock_supabase.delete_row.assert_called_once_with("resources", "res-1")

    def test_reject_deletes_pending_resource(self, mock_supabase, mock_storage):
        mock_supabase.fetch_by_id.return_value = make_resource_row(approved=False)

        ResourceService.reject_resource("res-1")

        mock_supabase.delete_row.assert_called_once_with("resources", "res-1")

    def test_approve_missing_resource(self, mock_supabase):
        mock_supabase.update_row.return_value = None

        with pytest.raises(ResourceNotFoundError):
            ResourceService.approve_resource("nope")


# =============================================================================
# Download Tests
# =============================================================================

class TestRecordDownload:
    """Test download access rules."""

    def test_free_resource(self, mock_supabase, mock_purchases):
        mock_supabase.fetch_by_id.return_value = make_resource_row(price=0, downloads=4)

        result = ResourceService.record_download("res-1", USER_ID)

        assert result["downloads"] == 5
        mock_supabase.update_row.assert_called_once_with("resources", "res-1", {"downloads": 5})
        mock_purchases.has_user_purchased.assert_not_called()

    def test_paid_resource_requires_purchase(self, mock_supabase, mock_purchases):
        mock_supabase.fetch_by_id.return_value = make_resource_row(price=299)

        with pytest.raises(PurchaseRequiredError):
            ResourceService.record_download("res-1", USER_ID)

        mock_supabase.update_row.assert_not_called()

    def test_paid_resource_after_purchase(self, mock_supabase, mock_purchases):
        mock_supabase.fetch_by_id.return_value = make_resource_row(price=299)
        mock_purchases.has_user_purchased.return_value = True

        result = ResourceService.record_download("res-1", USER_ID)

        assert result["file_url"].endswith(".pdf")

    def test_uploader_downloads_own_resource(self, mock_supabase, mock_purchases):
        mock_supabase.fetch_by_id.return_value = make_resource_row(price=299, uploader_id=USER_ID)

        result = ResourceService.record_download("res-1", USER_ID)

        assert result["resource_id"] == "res-1"
