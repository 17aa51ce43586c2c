"""Derived per-property and dashboard metrics."""

from typing import Dict, Literal

from review_dashboard.models.review import CanonicalModel, PropertyRef

Trend = Literal["up", "down", "stable"]


class PropertyPerformance(CanonicalModel):
    """Performance summary for a single property."""

    property: PropertyRef
    total_reviews: int = 0
    average_rating: float = 0.0
    rating_distribution: Dict[int, int] = {}
    category_averages: Dict[str, float] = {}
    approved_count: int = 0
    pending_count: int = 0
    recent_trend: Trend = "stable"
    channel_breakdown: Dict[str, int] = {}


class DashboardStats(CanonicalModel):
    """Headline numbers across all guest reviews."""

    total_reviews: int = 0
    property_count: int = 0
    average_rating: float = 0.0
    five_star_count: int = 0
    low_rating_count: int = 0
    approved_count: int = 0
    approved_percent: int = 0
