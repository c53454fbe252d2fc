# =============================================================================
# core/services/resource_service.py - Resource Business Logic
# =============================================================================
# Catalog listing, upload, edit, delete, download and moderation of
# resources. Exact-match filters are pushed down to Supabase; the rest of
# the browse pipeline (substring filters, search, sort, paging) runs in
# lib/catalog.py over the fetched rows.
# =============================================================================

import logging
from typing import Any

from app.config import settings
from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    PermissionDeniedError,
    PurchaseRequiredError,
    ResourceNotFoundError,
)
from core.models.resource import (
    Resource,
    ResourceCreate,
    ResourceList,
    ResourceUpdate,
    SearchFilters,
)
from core.services.purchase_service import PurchaseService
from core.services.storage_service import StorageService
from lib import catalog
from lib.supabase_client import RESOURCES_TABLE, SupabaseClient
from lib.utils import file_extension, normalize_id

logger = logging.getLogger(__name__)

# Rows per catalog request; matches the PostgREST max-rows default
CATALOG_FETCH_BATCH = 1000


class ResourceService:
    """
    Service for resource operations.

    Provides a clean interface between API routes and Supabase.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def get_resource(
        resource_id: str,
        user_id: str | None = None,
        is_admin: bool = False,
    ) -> Resource:
        """
        Get a resource by ID.

        Unapproved resources are only visible to their uploader and admins.

        Raises:
            ResourceNotFoundError: If missing or not visible to the caller
        """
        row = SupabaseClient.fetch_by_id(RESOURCES_TABLE, resource_id)
        if not row:
            raise ResourceNotFoundError(resource_id)

        resource = Resource.model_validate(row)

        if not resource.approved and not is_admin:
            if not user_id or resource.uploader_id != normalize_id(user_id):
                # Don't reveal that a pending resource exists
                raise ResourceNotFoundError(resource_id)

        return resource

    @staticmethod
    def list_resources(
        filters: SearchFilters | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> ResourceList:
        """
        Browse approved resources.

        Args:
            filters: Catalog filters and sort option
            page: 1-indexed page number
            page_size: Items per page (defaults to settings.DEFAULT_PAGE_SIZE)

        Returns:
            ResourceList page
        """
        filters = filters or SearchFilters()
        page_size = page_size or settings.DEFAULT_PAGE_SIZE

        rows: list[dict[str, Any]] = []
        start = 0
        while True:
            # PostgREST caps each response (1000 rows by default), so read
            # the filtered catalog in windows until a short one comes back
            end = start + CATALOG_FETCH_BATCH - 1
            try:
                response = (
                    ResourceService._catalog_query(filters)
                    .order("created_at", desc=True)
                    .order("id")
                    .range(start, end)
                    .execute()
                )
            except Exception as e:
                logger.error(f"Failed to list resources (rows {start}-{end}): {e}")
                raise

            batch = response.data or []
            rows.extend(batch)
            if len(batch) < CATALOG_FETCH_BATCH:
                break
            start += CATALOG_FETCH_BATCH

        logger.debug(f"Fetched {len(rows)} catalog rows for in-memory filtering")
        resources = [Resource.model_validate(row) for row in rows]
        return catalog.browse(resources, filters, page=page, page_size=page_size)

    @staticmethod
    def _catalog_query(filters: SearchFilters):
        """Approved resources with the exact-match filters applied server-side."""
        client = SupabaseClient.get_client()
        query = client.table(RESOURCES_TABLE).select("*").eq("approved", True)

        if filters.category is not None:
            query = query.eq("category", filters.category.value)
        if filters.semester:
            query = query.eq("semester", filters.semester)
        if filters.year:
            query = query.eq("year", filters.year)
        if filters.branch:
            query = query.eq("branch", filters.branch)
        if filters.price_min is not None:
            query = query.gte("price", filters.price_min)
        if filters.price_max is not None:
            query = query.lte("price", filters.price_max)

        return query

    @staticmethod
    def list_uploader_resources(uploader_id: str) -> list[Resource]:
        """All resources uploaded by a user, newest first, approved or not."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(RESOURCES_TABLE)
                .select("*")
                .eq("uploader_id", normalize_id(uploader_id))
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list uploads for {uploader_id}: {e}")
            raise

        return [Resource.model_validate(row) for row in response.data or []]

    # -------------------------------------------------------------------------
    # Upload
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_upload(filename: str, size_bytes: int) -> None:
        """
        Check extension and size against settings.

        Raises:
            InvalidFileTypeError: If the extension is not allowed
            FileTooLargeError: If the file exceeds MAX_UPLOAD_SIZE_MB
        """
        if file_extension(filename) not in settings.allowed_extensions_list:
            raise InvalidFileTypeError(filename, settings.allowed_extensions_list)

        if size_bytes > settings.max_upload_size_bytes:
            raise FileTooLargeError(size_bytes / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    @staticmethod
    def create_resource(
        uploader_id: str,
        data: ResourceCreate,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> Resource:
        """
        Upload a file and create its resource row.

        New resources wait for admin approval before they appear in the
        catalog. If the row insert fails, the uploaded file is removed.

        Raises:
            InvalidFileTypeError, FileTooLargeError: On invalid files
            StorageUploadError: If the upload fails
        """
        ResourceService.validate_upload(filename, len(content))

        uploader_id = normalize_id(uploader_id)
        path = StorageService.upload_file(
            data.category, uploader_id, filename, content, content_type
        )
        file_url = StorageService.get_public_url(data.category, path)

        row = {
            **data.model_dump(mode="json"),
            "file_url": file_url,
            "uploader_id": uploader_id,
            "approved": False,
            "downloads": 0,
            "rating": 0,
            "review_count": 0,
        }

        try:
            created = SupabaseClient.insert_row(RESOURCES_TABLE, row)
        except Exception:
            StorageService.delete_file(data.category, path)
            raise

        logger.info(f"Created resource: {created['id']} by uploader: {uploader_id}")
        return Resource.model_validate(created)

    # -------------------------------------------------------------------------
    # Edit / Delete
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_can_modify(resource: Resource, user_id: str, is_admin: bool, action: str) -> None:
        if not is_admin and resource.uploader_id != normalize_id(user_id):
            raise PermissionDeniedError(action)

    @staticmethod
    def update_resource(
        resource_id: str,
        updates: ResourceUpdate,
        user_id: str,
        is_admin: bool = False,
    ) -> Resource:
        """
        Edit a resource. Only the uploader or an admin may do this.

        Raises:
            ResourceNotFoundError: If the resource doesn't exist
            PermissionDeniedError: If the caller may not edit it
        """
        resource = ResourceService.get_resource(resource_id, user_id=user_id, is_admin=is_admin)
        ResourceService._check_can_modify(resource, user_id, is_admin, "edit resource")

        update_data = updates.to_update_dict()
        if not update_data:
            return resource  # Nothing to update

        row = SupabaseClient.update_row(RESOURCES_TABLE, resource_id, update_data)
        if not row:
            raise ResourceNotFoundError(resource_id)

        logger.info(f"Updated resource: {resource_id} fields={sorted(update_data)}")
        return Resource.model_validate(row)

    @staticmethod
    def delete_resource(resource_id: str, user_id: str, is_admin: bool = False) -> None:
        """
        Delete a resource's stored file and then its row.

        Raises:
            ResourceNotFoundError: If the resource doesn't exist
            PermissionDeniedError: If the caller may not delete it
        """
        resource = ResourceService.get_resource(resource_id, user_id=user_id, is_admin=is_admin)
        ResourceService._check_can_modify(resource, user_id, is_admin, "delete resource")

        StorageService.delete_by_url(resource.category, resource.file_url)
        SupabaseClient.delete_row(RESOURCES_TABLE, resource_id)
        logger.info(f"Deleted resource: {resource_id}")

    # -------------------------------------------------------------------------
    # Downloads
    # -------------------------------------------------------------------------

    @staticmethod
    def record_download(resource_id: str, user_id: str) -> dict[str, Any]:
        """
        Hand out a resource's file URL and bump its download counter.

        Allowed when the resource is free, the caller uploaded it, or the
        caller has a completed purchase.

        Raises:
            ResourceNotFoundError: If the resource isn't visible
            PurchaseRequiredError: If a paid resource hasn't been bought
        """
        resource = ResourceService.get_resource(resource_id, user_id=user_id)
        user_id = normalize_id(user_id)

        allowed = (
            resource.is_free
            or resource.uploader_id == user_id
            or PurchaseService.has_user_purchased(user_id, resource_id)
        )
        if not allowed:
            raise PurchaseRequiredError(resource_id)

        downloads = resource.downloads + 1
        SupabaseClient.update_row(RESOURCES_TABLE, resource_id, {"downloads": downloads})
        logger.debug(f"Download #{downloads} of resource {resource_id} by {user_id}")

        return {
            "resource_id": resource.id,
            "file_url": resource.file_url,
            "downloads": downloads,
        }

    # -------------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------------

    @staticmethod
    def list_pending() -> list[Resource]:
        """Resources awaiting approval, oldest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(RESOURCES_TABLE)
                .select("*")
                .eq("approved", False)
                .order("created_at", desc=False)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list pending resources: {e}")
            raise

        return [Resource.model_validate(row) for row in response.data or []]

    @staticmethod
    def approve_resource(resource_id: str) -> Resource:
        """
        Publish a pending resource to the catalog.

        Raises:
            ResourceNotFoundError: If the resource doesn't exist
        """
        row = SupabaseClient.update_row(RESOURCES_TABLE, resource_id, {"approved": True})
        if not row:
            raise ResourceNotFoundError(resource_id)

        logger.info(f"Approved resource: {resource_id}")
        return Resource.model_validate(row)

    @staticmethod
    def reject_resource(resource_id: str) -> None:
        """Reject a pending resource: its file and row are removed."""
        ResourceService.delete_resource(resource_id, user_id="", is_admin=True)
        logger.info(f"Rejected resource: {resource_id}")
