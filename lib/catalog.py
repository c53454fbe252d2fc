# =============================================================================
# lib/catalog.py - Resource Catalog Filtering & Sorting
# =============================================================================
# In-memory browse logic shared by the live catalog (rows fetched from
# Supabase) and the bundled sample catalog:
# - apply_filters: Keep resources matching every set filter
# - sort_resources: Order by one of the SortOption keys
# - paginate: 1-indexed page slice
# - browse: filter -> sort -> paginate
#
# Filter semantics:
#   category, semester, year, branch   exact match
#   subject                            case-insensitive substring
#   price_min / price_max              inclusive bounds, either may be open
#   search                             case-insensitive substring of
#                                      title OR description OR subject
#
# Usage:
#   from lib.catalog import browse
#   page = browse(resources, SearchFilters(category="notes", sort_by="popular"))
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar

from core.models.resource import Resource, ResourceList, SearchFilters, SortOption
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InvalidFilterError(ApplicationError):
    """Raised for browse parameters the catalog cannot honour."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            message,
            code="INVALID_FILTER",
            suggestion=suggestion,
            details=details,
        )


# =============================================================================
# Filtering
# =============================================================================

def _contains(haystack: str | None, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def matches_search(resource: Resource, query: str) -> bool:
    """True if query is a case-insensitive substring of title, description or subject."""
    return (
        _contains(resource.title, query)
        or _contains(resource.description, query)
        or _contains(resource.subject, query)
    )


def matches_filters(resource: Resource, filters: SearchFilters) -> bool:
    """Check a single resource against every filter that is set."""
    if filters.category is not None and resource.category != filters.category:
        return False
    if filters.subject and not _contains(resource.subject, filters.subject):
        return False
    if filters.semester and resource.semester != filters.semester:
        return False
    if filters.year and resource.year != filters.year:
        return False
    if filters.branch and resource.branch != filters.branch:
        return False
    if filters.price_min is not None and resource.price < filters.price_min:
        return False
    if filters.price_max is not None and resource.price > filters.price_max:
        return False
    if filters.search and not matches_search(resource, filters.search):
        return False
    return True


def apply_filters(resources: Iterable[Resource], filters: SearchFilters) -> list[Resource]:
    """
    Keep resources that match every set filter, preserving input order.

    Example:
        notes = apply_filters(resources, SearchFilters(category="notes"))
        assert all(r.category == ResourceCategory.NOTES for r in notes)
    """
    return [r for r in resources if matches_filters(r, filters)]


# =============================================================================
# Sorting
# =============================================================================

def _timestamp(value: datetime) -> float:
    # Naive timestamps are stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


# sort option -> (key function, descending)
SORT_KEYS: dict[SortOption, tuple[Callable[[Resource], Any], bool]] = {
    SortOption.LATEST: (lambda r: _timestamp(r.created_at), True),
    SortOption.POPULAR: (lambda r: r.downloads, True),
    SortOption.RATING: (lambda r: r.rating, True),
    SortOption.PRICE_LOW: (lambda r: r.price, False),
    SortOption.PRICE_HIGH: (lambda r: r.price, True),
}


def sort_resources(
    resources: Iterable[Resource],
    sort_by: SortOption | str = SortOption.LATEST,
) -> list[Resource]:
    """
    Return a new list ordered by the given sort option.

    The sort is stable: resources with equal keys keep their input order.
    Unknown option strings raise ValueError (via SortOption).
    """
    key, descending = SORT_KEYS[SortOption(sort_by)]
    return sorted(resources, key=key, reverse=descending)


# =============================================================================
# Pagination
# =============================================================================

def paginate(items: Sequence[T], page: int = 1, page_size: int = 12) -> tuple[list[T], int]:
    """
    Slice one 1-indexed page out of items.

    Returns:
        Tuple of (page items, total item count)

    Raises:
        InvalidFilterError: If page or page_size is below 1
    """
    if page < 1 or page_size < 1:
        raise InvalidFilterError(
            f"Invalid page={page} page_size={page_size}",
            details={"page": page, "page_size": page_size},
            suggestion="Use page >= 1 and page_size >= 1",
        )
    offset = (page - 1) * page_size
    return list(items[offset:offset + page_size]), len(items)


def browse(
    resources: Iterable[Resource],
    filters: SearchFilters | None = None,
    page: int = 1,
    page_size: int = 12,
) -> ResourceList:
    """
    Run the full catalog pipeline: filter, then sort, then paginate.

    Args:
        resources: Candidate resources (any order)
        filters: Browse parameters; None means "everything, newest first"
        page: 1-indexed page number
        page_size: Items per page

    Returns:
        ResourceList with the requested page and the total match count
    """
    filters = filters or SearchFilters()
    matched = sort_resources(apply_filters(resources, filters), filters.sort_by)
    items, total = paginate(matched, page, page_size)

    logger.debug(
        f"Catalog browse: {total} matches, page {page} "
        f"({len(items)} items, sort={filters.sort_by.value})"
    )
    return ResourceList(items=items, total=total, page=page, page_size=page_size)
