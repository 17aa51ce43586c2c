"""Batch normalization result envelope."""

from typing import List, Optional
from pydantic import Field

from review_dashboard.models.review import CanonicalModel, CanonicalReview, PropertyRef


class DateRange(CanonicalModel):
    """Earliest and latest submission instants as ISO strings."""

    earliest: str = ""
    latest: str = ""


class ResultMeta(CanonicalModel):
    """Collection-level metadata."""

    total: int = 0
    properties: List[PropertyRef] = Field(default_factory=list)
    channels: List[str] = Field(default_factory=list)
    date_range: DateRange = Field(default_factory=DateRange)
    unfiltered_total: Optional[int] = None


class NormalizedResult(CanonicalModel):
    """Normalized reviews plus metadata, or a failure with an error message."""

    success: bool
    reviews: List[CanonicalReview] = Field(default_factory=list)
    meta: ResultMeta = Field(default_factory=ResultMeta)
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "NormalizedResult":
        return cls(success=False, error=error)
