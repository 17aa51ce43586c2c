"""Normalization, aggregation and filtering of review collections."""

from review_dashboard.pipeline.aggregator import (
    collection_meta,
    dashboard_stats,
    performance_for,
    performance_for_all,
)
from review_dashboard.pipeline.filters import filter_reviews, public_reviews, sort_reviews
from review_dashboard.pipeline.normalizer import normalize, normalize_collection

__all__ = [
    "collection_meta",
    "dashboard_stats",
    "filter_reviews",
    "normalize",
    "normalize_collection",
    "performance_for",
    "performance_for_all",
    "public_reviews",
    "sort_reviews",
]
