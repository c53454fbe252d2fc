# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the Pydantic models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Selector values ("all", blanks) normalize to "no filter"
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    PaymentStatus,
    PaymentStatusUpdate,
    Purchase,
    Resource,
    ResourceCategory,
    ResourceCreate,
    ResourceList,
    ResourceUpdate,
    Review,
    ReviewCreate,
    ReviewUpdate,
    SearchFilters,
    SignUpRequest,
    SortOption,
)
from tests.conftest import make_resource_row


# =============================================================================
# Resource Model Tests
# =============================================================================

class TestResource:
    """Tests for Resource model."""

    def test_valid_resource(self):
        """Test parsing a row from the resources table."""
        # Arrange
        row = make_resource_row()

        # Act
        resource = Resource.model_validate(row)

        # Assert
        assert resource.category == ResourceCategory.NOTES
        assert resource.price == 299
        assert resource.created_at.year == 2024
        assert not resource.is_free

    def test_numeric_semester_and_year_become_strings(self):
        resource = Resource.model_validate(make_resource_row(semester=3, year=2024))

        assert resource.semester == "3"
        assert resource.year == "2024"

    def test_free_resource(self):
        assert Resource.model_validate(make_resource_row(price=0)).is_free

    def test_invalid_category(self):
        with pytest.raises(ValidationError):
            Resource.model_validate(make_resource_row(category="videos"))

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Resource.model_validate(make_resource_row(price=-1))


class TestResourceCreate:
    """Tests for ResourceCreate model."""

    def test_valid_create(self):
        data = ResourceCreate(
            title="OS Notes",
            category="notes",
            subject="Operating Systems",
            semester="4",
            year="2024",
        )

        assert data.price == 0
        assert data.branch is None

    def test_year_must_be_four_characters(self):
        with pytest.raises(ValidationError):
            ResourceCreate(title="OS", category="notes", subject="OS", semester="4", year="24")


class TestResourceUpdate:
    """Tests for ResourceUpdate model."""

    def test_only_set_fields_are_updated(self):
        updates = ResourceUpdate(price=0, title="New title")

        assert updates.to_update_dict() == {"price": 0, "title": "New title"}

    def test_empty_update(self):
        assert ResourceUpdate().to_update_dict() == {}


# =============================================================================
# SearchFilters Tests
# =============================================================================

class TestSearchFilters:
    """Tests for SearchFilters model."""

    def test_defaults(self):
        filters = SearchFilters()

        assert filters.category is None
        assert filters.sort_by == SortOption.LATEST

    @pytest.mark.parametrize("value", ["all", "ALL", "", "   "])
    def test_selector_values_mean_unset(self, value):
        filters = SearchFilters(category=value, semester=value, year=value, branch=value)

        assert filters.category is None
        assert filters.semester is None
        assert filters.year is None
        assert filters.branch is None

    def test_search_is_stripped(self):
        assert SearchFilters(search="  dsa ").search == "dsa"
        assert SearchFilters(search="  ").search is None

    def test_price_min_above_max_rejected(self):
        with pytest.raises(ValidationError):
            SearchFilters(price_min=500, price_max=100)

    def test_equal_price_bounds_allowed(self):
        filters = SearchFilters(price_min=100, price_max=100)

        assert filters.price_min == filters.price_max == 100

    def test_unknown_sort_option(self):
        with pytest.raises(ValidationError):
            SearchFilters(sort_by="cheapest")


class TestResourceList:
    def test_total_pages(self):
        assert ResourceList(total=25, page=1, page_size=12).total_pages == 3
        assert ResourceList(total=0, page=1, page_size=12).total_pages == 0


# =============================================================================
# Purchase / Review / Auth Model Tests
# =============================================================================

class TestPurchaseModels:
    def test_purchase_defaults_to_pending(self):
        purchase = Purchase(id="p1", user_id="u1", resource_id="r1", amount=199)

        assert purchase.status == PaymentStatus.PENDING

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            PaymentStatusUpdate(status="refunded")


class TestReviewModels:
    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            ReviewCreate(rating=rating)

    def test_partial_update(self):
        assert ReviewUpdate(comment="Better now").to_update_dict() == {"comment": "Better now"}

    def test_reviewer_name_from_profile_join(self):
        review = Review.model_validate({
            "id": "rev-1",
            "user_id": "u1",
            "resource_id": "r1",
            "rating": 5,
            "profiles": {"full_name": "Asha Rao"},
        })

        assert review.reviewer_name == "Asha Rao"

    def test_reviewer_name_without_profile(self):
        review = Review(id="rev-1", user_id="u1", resource_id="r1", rating=3, profiles=None)

        assert review.reviewer_name is None


class TestSignUpRequest:
    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            SignUpRequest(email="not-an-email", password="secret1", full_name="Asha")

    def test_short_password(self):
        with pytest.raises(ValidationError):
            SignUpRequest(email="asha@example.com", password="123", full_name="Asha")
