# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles resource file upload, public URLs and removal with Supabase Storage.
# Each resource category has its own bucket (see Settings.bucket_names).
# =============================================================================

import logging

from app.config import settings
from app.exceptions import StorageUploadError
from core.models.resource import ResourceCategory
from lib.supabase_client import SupabaseClient
from lib.utils import build_storage_path, path_from_public_url

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for Supabase Storage operations.

    Object paths are {uploader_id}/{epoch_millis}.{ext} inside the
    category's bucket.
    """

    @staticmethod
    def bucket_for(category: ResourceCategory | str) -> str:
        """Storage bucket name for a resource category."""
        return settings.bucket_names[ResourceCategory(category).value]

    @staticmethod
    def upload_file(
        category: ResourceCategory | str,
        uploader_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Upload raw file content to the category's bucket.

        Args:
            category: Resource category (selects the bucket)
            uploader_id: Owner of the file (first path segment)
            filename: Original filename (only its extension is kept)
            content: File bytes
            content_type: MIME type stored with the object

        Returns:
            Storage path of the uploaded object

        Raises:
            StorageUploadError: If upload fails
        """
        client = SupabaseClient.get_client()
        bucket = StorageService.bucket_for(category)
        path = build_storage_path(uploader_id, filename)

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type},
            )
            logger.info(f"Uploaded file to storage: {bucket}/{path} ({len(content)} bytes)")
            return path

        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(str(e))

    @staticmethod
    def get_public_url(category: ResourceCategory | str, storage_path: str) -> str:
        """Public URL for an object in the category's bucket."""
        client = SupabaseClient.get_client()
        bucket = StorageService.bucket_for(category)

        try:
            return client.storage.from_(bucket).get_public_url(storage_path)
        except Exception as e:
            logger.error(f"Failed to get public URL: {e}")
            raise

    @staticmethod
    def delete_file(category: ResourceCategory | str, storage_path: str) -> bool:
        """
        Delete an object from the category's bucket.

        Failures are logged, not raised: a missing file must not block
        deleting the resource row.

        Returns:
            True if deleted successfully
        """
        client = SupabaseClient.get_client()
        bucket = StorageService.bucket_for(category)

        try:
            client.storage.from_(bucket).remove([storage_path])
            logger.info(f"Deleted file from storage: {bucket}/{storage_path}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete file {bucket}/{storage_path}: {e}")
            return False

    @staticmethod
    def delete_by_url(category: ResourceCategory | str, file_url: str | None) -> bool:
        """Delete the object behind a public URL. No-op for empty URLs."""
        if not file_url:
            return False
        return StorageService.delete_file(category, path_from_public_url(file_url))
