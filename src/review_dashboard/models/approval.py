"""Approval request and response models."""

from typing import List
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from review_dashboard.models.review import CanonicalModel


class ApprovalRequest(BaseModel):
    """Manager request to show or hide a review."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    review_id: StrictStr = Field(alias="reviewId", min_length=1)
    approved: StrictBool


class ApprovalResult(CanonicalModel):
    """Outcome of an approval mutation."""

    success: bool = True
    review_id: str
    approved: bool
    total_approved: int


class ApprovalSnapshot(CanonicalModel):
    """Current approval state."""

    approved_review_ids: List[str]
    total_approved: int
    last_updated: str


class ApprovalSeed(BaseModel):
    """Bundled initial approval state."""

    model_config = ConfigDict(populate_by_name=True)

    approved_review_ids: List[str] = Field(default_factory=list, alias="approvedReviewIds")
    last_updated: str = Field(default="", alias="lastUpdated")
