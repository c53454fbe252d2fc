# =============================================================================
# lib/stats.py - Marketplace Aggregates
# =============================================================================
# Pure aggregation over rows already fetched from Supabase:
# - compute_purchase_stats: revenue and status counts for the admin dashboard
# - compute_review_stats: average rating and star distribution per resource
# =============================================================================

import math
from collections import Counter
from typing import Any, Iterable

from core.models.purchase import PaymentStatus, PurchaseStats
from core.models.review import ReviewStats


def _row_category(row: dict[str, Any]) -> str | None:
    """
    Category of the purchased resource.

    Rows come from `transactions` with the resource embedded as
    {"resources": {"category": ...}}; a flat "category" key also works.
    """
    embedded = row.get("resources")
    if isinstance(embedded, dict):
        return embedded.get("category")
    return row.get("category")


def compute_purchase_stats(rows: Iterable[dict[str, Any]]) -> PurchaseStats:
    """
    Summarize purchases.

    Only completed purchases count toward revenue, the completed total and
    the per-category counts. Pending and failed purchases are only counted.

    Example:
        rows = [
            {"status": "completed", "amount": 299, "resources": {"category": "notes"}},
            {"status": "pending", "amount": 199, "resources": {"category": "papers"}},
        ]
        stats = compute_purchase_stats(rows)
        # stats.total_revenue == 299, stats.pending_purchases == 1
    """
    stats = PurchaseStats()
    categories: Counter[str] = Counter()

    for row in rows:
        status = row.get("status")
        if status == PaymentStatus.COMPLETED.value:
            stats.total_revenue += float(row.get("amount") or 0)
            stats.total_purchases += 1
            category = _row_category(row)
            if category:
                categories[category] += 1
        elif status == PaymentStatus.PENDING.value:
            stats.pending_purchases += 1
        elif status == PaymentStatus.FAILED.value:
            stats.failed_purchases += 1

    stats.category_counts = dict(categories)
    return stats


def compute_review_stats(ratings: Iterable[int]) -> ReviewStats:
    """
    Aggregate star ratings.

    The average is rounded half-up to one decimal; no reviews gives 0.

    Example:
        compute_review_stats([5, 4, 4])
        # ReviewStats(total_reviews=3, average_rating=4.3,
        #             rating_distribution={5: 1, 4: 2})
    """
    ratings = [int(r) for r in ratings]
    total = len(ratings)
    average = math.floor(sum(ratings) / total * 10 + 0.5) / 10 if total else 0

    return ReviewStats(
        total_reviews=total,
        average_rating=average,
        rating_distribution=dict(Counter(ratings)),
    )
