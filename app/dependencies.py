# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared request parameters.
# These are injected into route handlers using Depends().
# =============================================================================

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query
from pydantic import ValidationError

from app.config import settings
from core.models.resource import SearchFilters, SortOption
from lib.catalog import InvalidFilterError


def get_search_filters(
    category: Annotated[str | None, Query(description="notes, syllabus, papers or all")] = None,
    subject: Annotated[str | None, Query(description="Case-insensitive subject substring")] = None,
    semester: Annotated[str | None, Query()] = None,
    year: Annotated[str | None, Query()] = None,
    branch: Annotated[str | None, Query()] = None,
    price_min: Annotated[float | None, Query(ge=0)] = None,
    price_max: Annotated[float | None, Query(ge=0)] = None,
    search: Annotated[str | None, Query(description="Matches title, description or subject")] = None,
    sort_by: Annotated[SortOption, Query()] = SortOption.LATEST,
) -> SearchFilters:
    """
    Collect catalog query parameters into SearchFilters.

    Raises:
        InvalidFilterError: If the combination is invalid (e.g. price_min > price_max)
    """
    try:
        return SearchFilters(
            category=category,
            subject=subject,
            semester=semester,
            year=year,
            branch=branch,
            price_min=price_min,
            price_max=price_max,
            search=search,
            sort_by=sort_by,
        )
    except ValidationError as e:
        raise InvalidFilterError(
            "Invalid catalog filters",
            details={"errors": [err["msg"] for err in e.errors()]},
            suggestion="Use a known category and keep price_min <= price_max",
        )


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int


def get_pagination(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[int | None, Query(ge=1, description="Items per page")] = None,
) -> Pagination:
    """Page parameters, with page_size defaulted and capped from settings."""
    size = min(page_size or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return Pagination(page=page, page_size=size)


# Type aliases for dependency injection
FiltersDep = Annotated[SearchFilters, Depends(get_search_filters)]
PaginationDep = Annotated[Pagination, Depends(get_pagination)]
