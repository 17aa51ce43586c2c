"""Data models for raw and normalized reviews."""

from review_dashboard.models.approval import (
    ApprovalRequest,
    ApprovalResult,
    ApprovalSeed,
    ApprovalSnapshot,
)
from review_dashboard.models.criteria import FilterCriteria, SortSpec
from review_dashboard.models.performance import DashboardStats, PropertyPerformance
from review_dashboard.models.raw import ProviderResponse, RawCategory, RawReview
from review_dashboard.models.result import DateRange, NormalizedResult, ResultMeta
from review_dashboard.models.review import CanonicalReview, CategoryRating, PropertyRef

__all__ = [
    "ApprovalRequest",
    "ApprovalResult",
    "ApprovalSeed",
    "ApprovalSnapshot",
    "CanonicalReview",
    "CategoryRating",
    "DashboardStats",
    "DateRange",
    "FilterCriteria",
    "NormalizedResult",
    "PropertyPerformance",
    "PropertyRef",
    "ProviderResponse",
    "RawCategory",
    "RawReview",
    "ResultMeta",
    "SortSpec",
]
