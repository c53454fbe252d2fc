# =============================================================================
# tests/test_stats.py - Marketplace Aggregate Tests
# =============================================================================

from lib.stats import compute_purchase_stats, compute_review_stats


class TestComputePurchaseStats:
    """Test compute_purchase_stats function."""

    def test_empty(self):
        stats = compute_purchase_stats([])

        assert stats.total_revenue == 0
        assert stats.total_purchases == 0
        assert stats.category_counts == {}

    def test_only_completed_purchases_count_toward_revenue(self):
        rows = [
            {"status": "completed", "amount": 299, "resources": {"category": "notes"}},
            {"status": "completed", "amount": 199, "resources": {"category": "papers"}},
            {"status": "completed", "amount": 0, "resources": {"category": "notes"}},
            {"status": "pending", "amount": 499, "resources": {"category": "notes"}},
            {"status": "failed", "amount": 150, "resources": {"category": "syllabus"}},
        ]

        stats = compute_purchase_stats(rows)

        assert stats.total_revenue == 498
        assert stats.total_purchases == 3
        assert stats.pending_purchases == 1
        assert stats.failed_purchases == 1
        assert stats.category_counts == {"notes": 2, "papers": 1}

    def test_flat_category_and_missing_resource(self):
        """Category may be a flat column; a deleted resource has no category."""
        rows = [
            {"status": "completed", "amount": "150.5", "category": "syllabus"},
            {"status": "completed", "amount": None, "resources": None},
        ]

        stats = compute_purchase_stats(rows)

        assert stats.total_revenue == 150.5
        assert stats.total_purchases == 2
        assert stats.category_counts == {"syllabus": 1}


class TestComputeReviewStats:
    """Test compute_review_stats function."""

    def test_no_reviews(self):
        stats = compute_review_stats([])

        assert stats.total_reviews == 0
        assert stats.average_rating == 0
        assert stats.rating_distribution == {}

    def test_average_and_distribution(self):
        stats = compute_review_stats([5, 4, 4])

        assert stats.total_reviews == 3
        assert stats.average_rating == 4.3
        assert stats.rating_distribution == {5: 1, 4: 2}

    def test_half_rounds_up(self):
        """4.25 rounds to 4.3 and 4.75 to 4.8 (no banker's rounding)."""
        assert compute_review_stats([5, 4, 4, 4]).average_rating == 4.3
        assert compute_review_stats([5, 5, 5, 4]).average_rating == 4.8

    def test_single_review(self):
        assert compute_review_stats([3]).average_rating == 3.0
