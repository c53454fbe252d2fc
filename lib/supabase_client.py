# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase operations.
# It implements the singleton pattern to reuse a single service-role client
# and provides row helpers used by the service layer:
# - fetch_by_id / insert_row / update_row / delete_row for any table
# - fetch_profile for role checks
#
# Auth flows (sign-in, sign-up) use a fresh anon-key client per call so a
# signed-in session never lingers on the shared client.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   resource = SupabaseClient.fetch_by_id("resources", resource_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import Client, ClientOptions, create_client

from app.config import settings
from lib.utils import normalize_id

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST error code for ".single()" matching no rows
NO_ROWS_CODE = "PGRST116"

# Table names
PROFILES_TABLE = "profiles"
RESOURCES_TABLE = "resources"
TRANSACTIONS_TABLE = "transactions"
REVIEWS_TABLE = "reviews"
WISHLIST_TABLE = "wishlist"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a machine-readable code and, where possible, a hint on how to
    fix the problem.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def is_no_rows_error(error: Exception) -> bool:
    """True if the error is PostgREST reporting that .single() found nothing."""
    return NO_ROWS_CODE in str(error)


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    One service-role client instance is shared across the application.
    All methods are class methods for easy access without instantiation.

    Example:
        resource = SupabaseClient.fetch_by_id("resources", "8a1c...")
        if resource is None:
            ...
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        Ownership checks are done in the service layer instead.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def create_auth_client(cls) -> Client:
        """
        Create a short-lived anon-key client for user auth calls.

        Sessions are neither persisted nor refreshed; the tokens are handed
        back to the caller instead.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            return create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_ANON_KEY,
                options=ClientOptions(
                    persist_session=False,
                    auto_refresh_token=False,
                ),
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase auth client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used by tests)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Generic Row Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_by_id(
        cls,
        table: str,
        row_id: str | UUID,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by primary key.

        Args:
            table: Table name
            row_id: Primary key value
            columns: PostgREST select expression

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        row_id_str = normalize_id(row_id)

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq("id", row_id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if is_no_rows_error(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_FAILED",
                suggestion=f"Check that the {table} table is accessible",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it with generated columns (id, created_at).

        Raises:
            SupabaseClientError: If insert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def update_row(
        cls,
        table: str,
        row_id: str | UUID,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update a row by primary key.

        Returns:
            Updated row, or None if no row matched

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        row_id_str = normalize_id(row_id)

        try:
            response = (
                client.table(table)
                .update(data)
                .eq("id", row_id_str)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table} row: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def delete_row(cls, table: str, row_id: str | UUID) -> bool:
        """
        Delete a row by primary key.

        Returns:
            True if a row was deleted

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()
        row_id_str = normalize_id(row_id)

        try:
            response = (
                client.table(table)
                .delete()
                .eq("id", row_id_str)
                .execute()
            )
            return bool(response.data)

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete {table} row: {e}",
                code="DELETE_FAILED",
                details={"table": table, "id": row_id_str}
            )

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_profile(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """Fetch a user's profile row, or None if it hasn't been created yet."""
        return cls.fetch_by_id(PROFILES_TABLE, user_id)

    @classmethod
    def upsert_profile(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Create or replace a profile row (keyed by id).

        Raises:
            SupabaseClientError: If upsert fails
        """
        client = cls.get_client()

        try:
            response = client.table(PROFILES_TABLE).upsert(data).execute()
            if response.data:
                return response.data[0]
            return data

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert profile: {e}",
                code="UPSERT_PROFILE_FAILED",
                details={"user_id": data.get("id")}
            )
