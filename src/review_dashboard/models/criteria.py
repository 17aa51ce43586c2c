"""Filter and sort criteria."""

from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, field_validator

SortField = Literal["date", "rating", "property", "channel"]
SortOrder = Literal["asc", "desc"]


class FilterCriteria(BaseModel):
    """Review filters. Every unset field imposes no constraint."""

    model_config = ConfigDict(frozen=True)

    property_id: Optional[str] = None
    channel: Optional[str] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    review_direction: Optional[Literal["guest", "host", "all"]] = None
    status: Optional[Literal["published", "pending", "rejected", "all"]] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    approved_only: bool = False

    @field_validator("date_from", "date_to")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class SortSpec(BaseModel):
    """Sort field and direction."""

    model_config = ConfigDict(frozen=True)

    field: SortField = "date"
    order: SortOrder = "desc"
