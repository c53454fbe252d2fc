# =============================================================================
# core/models/resource.py - Resource & Catalog Schemas
# =============================================================================
# A resource is one sellable document in the marketplace: a set of notes,
# a course syllabus or a collection of past papers.
#
# - Resource: Row mirrored from the `resources` table
# - ResourceCreate / ResourceUpdate: Upload and edit payloads
# - SearchFilters: Catalog browse parameters (search box + selectors)
# - ResourceList: One page of catalog results
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

# Selector value the pages send for "no filter"
ANY_VALUE = "all"


class ResourceCategory(str, Enum):
    """Kind of document a resource holds. Also selects the storage bucket."""
    NOTES = "notes"
    SYLLABUS = "syllabus"
    PAPERS = "papers"


class SortOption(str, Enum):
    """
    Catalog orderings.

    - latest: newest first (default)
    - popular: most downloaded first
    - rating: best rated first
    - price_low / price_high: cheapest / most expensive first
    """
    LATEST = "latest"
    POPULAR = "popular"
    RATING = "rating"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"


class Resource(BaseModel):
    """
    A resource as stored in the `resources` table.

    Example:
        {
            "id": "8a1c...",
            "title": "Complete Data Structures and Algorithms Notes",
            "category": "notes",
            "subject": "Computer Science",
            "semester": "3",
            "year": "2024",
            "price": 299,
            "approved": true,
            ...
        }
    """

    id: str = Field(..., description="Resource ID")
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="")
    category: ResourceCategory
    subject: str = Field(default="")
    semester: str = Field(default="")
    year: str = Field(default="")
    branch: str | None = Field(default=None, description="Engineering branch (CSE, ECE, ...)")
    price: float = Field(default=0, ge=0, description="Price in rupees; 0 means free")
    file_url: str = Field(default="")
    preview_url: str | None = None
    uploader_id: str = Field(default="")
    approved: bool = False
    downloads: int = Field(default=0, ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime | None = None

    # Supabase returns numeric semester/year for some rows
    @field_validator("semester", "year", mode="before")
    @classmethod
    def _coerce_to_str(cls, value):
        return "" if value is None else str(value)

    @property
    def is_free(self) -> bool:
        return self.price == 0


class ResourceCreate(BaseModel):
    """Metadata sent alongside an uploaded file."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)
    category: ResourceCategory
    subject: str = Field(..., min_length=1, max_length=120)
    semester: str = Field(..., min_length=1, max_length=20)
    year: str = Field(..., min_length=4, max_length=4)
    branch: str | None = Field(default=None, max_length=20)
    price: float = Field(default=0, ge=0, le=100000)


class ResourceUpdate(BaseModel):
    """
    Editable resource fields.

    Moderation (approved), counters (downloads, rating, review_count) and
    ownership are not editable through this schema.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    subject: str | None = Field(default=None, min_length=1, max_length=120)
    semester: str | None = Field(default=None, min_length=1, max_length=20)
    year: str | None = Field(default=None, min_length=4, max_length=4)
    branch: str | None = Field(default=None, max_length=20)
    price: float | None = Field(default=None, ge=0, le=100000)
    preview_url: str | None = None

    def to_update_dict(self) -> dict:
        """Only the fields the caller actually set."""
        return self.model_dump(exclude_unset=True)


class SearchFilters(BaseModel):
    """
    Catalog browse parameters.

    Every field is optional. Blank strings and the selector value "all"
    are treated as "not set", so the search page can forward its selector
    state verbatim.
    """

    category: ResourceCategory | None = None
    subject: str | None = None
    semester: str | None = None
    year: str | None = None
    branch: str | None = None
    price_min: float | None = Field(default=None, ge=0)
    price_max: float | None = Field(default=None, ge=0)
    search: str | None = None
    sort_by: SortOption = SortOption.LATEST

    @field_validator("category", "subject", "semester", "year", "branch", mode="before")
    @classmethod
    def _blank_means_unset(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("", ANY_VALUE):
            return None
        return value

    @field_validator("search", mode="before")
    @classmethod
    def _strip_search(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @model_validator(mode="after")
    def _check_price_range(self):
        if (
            self.price_min is not None
            and self.price_max is not None
            and self.price_min > self.price_max
        ):
            raise ValueError("price_min must not exceed price_max")
        return self


class ResourceList(BaseModel):
    """One page of catalog results with pagination info."""

    items: list[Resource] = Field(default_factory=list)
    total: int = Field(default=0, ge=0, description="Matches before pagination")
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, ge=1)

    @property
    def total_pages(self) -> int:
        return (self.total + self.page_size - 1) // self.page_size
