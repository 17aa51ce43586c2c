"""Provider-side review records as received from Hostaway."""

import json
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from review_dashboard.utils.logging import logger


class RawCategory(BaseModel):
    """One category rating on the provider's 0-10 scale."""

    category: str
    rating: Optional[float] = None


class RawReview(BaseModel):
    """Review record exactly as the provider sends it."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    type: str = "guest-to-host"
    status: str = "published"
    rating: Optional[float] = None
    public_review: str = Field(default="", alias="publicReview")
    private_review: Optional[str] = Field(default=None, alias="privateReview")
    categories: List[RawCategory] = Field(default_factory=list, alias="reviewCategory")
    submitted_at: str = Field(default="", alias="submittedAt")
    guest_name: str = Field(default="", alias="guestName")
    listing_name: str = Field(default="", alias="listingName")
    listing_id: Optional[int] = Field(default=None, alias="listingId")
    channel_name: Optional[str] = Field(default=None, alias="channelName")
    reservation_id: Optional[int] = Field(default=None, alias="reservationId")

    @field_validator(
        "public_review", "submitted_at", "guest_name", "listing_name", mode="before"
    )
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("categories", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("categories")
    @classmethod
    def _drop_unrated(cls, value: List[RawCategory]) -> List[RawCategory]:
        # Unrated categories carry no score to average
        return [c for c in value if c.rating is not None]


class ProviderResponse(BaseModel):
    """Provider response envelope."""

    status: Literal["success", "error"] = "success"
    result: List[RawReview] = Field(default_factory=list)
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ProviderResponse":
        """Build a response from decoded JSON, skipping records that fail validation.

        Args:
            payload: Decoded provider JSON

        Returns:
            Validated response envelope
        """
        status = payload.get("status", "success")
        if status not in ("success", "error"):
            status = "error"

        message = payload.get("message")
        if message is not None and not isinstance(message, str):
            message = json.dumps(message, default=str)

        records = payload.get("result") or []
        if not isinstance(records, list):
            logger.warning(f"Ignoring non-list provider result of type {type(records).__name__}")
            records = []

        reviews: List[RawReview] = []
        for item in records:
            try:
                reviews.append(RawReview.model_validate(item))
            except ValidationError as e:
                record_id = item.get("id") if isinstance(item, dict) else None
                logger.warning(f"Skipping malformed provider record {record_id}: {e}")

        return cls(status=status, result=reviews, message=message)

    @classmethod
    def failure(cls, message: str) -> "ProviderResponse":
        return cls(status="error", result=[], message=message)
