"""Canonical review models."""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CanonicalModel(BaseModel):
    """Frozen model that serializes with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict using the external field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PropertyRef(CanonicalModel):
    """Property a review belongs to."""

    id: str
    name: str
    short_name: str
    location: Optional[str] = None


class CategoryRating(CanonicalModel):
    """Normalized category rating."""

    name: str
    display_name: str
    rating: float
    max_rating: int = 10


class CanonicalReview(CanonicalModel):
    """Normalized review record."""

    id: str
    property_id: str
    property: PropertyRef

    # Content
    reviewer: str
    reviewer_initials: str
    content: str
    private_notes: Optional[str] = None

    # Ratings
    overall_rating: float
    max_rating: int = 5
    categories: List[CategoryRating] = Field(default_factory=list)

    # Metadata
    direction: Literal["guest", "host"] = Field(alias="type")
    status: str
    channel: str
    channel_display_name: str

    # Dates
    submitted_at: datetime
    submitted_at_formatted: str
    # False when the provider timestamp could not be parsed and submitted_at
    # holds the substitute clock value
    submitted_at_parsed: bool = True

    # Manager controls
    is_approved_for_display: bool = False
