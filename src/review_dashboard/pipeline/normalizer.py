"""Normalize raw provider reviews into canonical review records.

Normalization never raises on odd provider data. Missing names, unknown
categories and unparseable timestamps all resolve to documented defaults so a
single bad record cannot take down a dashboard load.
"""

from datetime import datetime, timezone
from typing import AbstractSet, Dict, List, Optional, Sequence

from review_dashboard.models.raw import ProviderResponse, RawCategory, RawReview
from review_dashboard.models.result import NormalizedResult
from review_dashboard.models.review import CanonicalReview, CategoryRating, PropertyRef
from review_dashboard.pipeline.aggregator import collection_meta
from review_dashboard.pipeline.text_utils import (
    extract_location,
    format_display_date,
    initials,
    parse_timestamp,
    round_half_up,
    short_property_name,
    slugify,
)
from review_dashboard.utils.logging import logger

CATEGORY_DISPLAY_NAMES: Dict[str, str] = {
    "cleanliness": "Cleanliness",
    "communication": "Communication",
    "accuracy": "Accuracy",
    "location": "Location",
    "value": "Value",
    "respect_house_rules": "House Rules",
    "check_in": "Check-in",
    "amenities": "Amenities",
}

CHANNEL_DISPLAY_NAMES: Dict[str, str] = {
    "airbnb": "Airbnb",
    "booking.com": "Booking.com",
    "vrbo": "VRBO",
    "direct": "Direct Booking",
    "expedia": "Expedia",
    "homeaway": "HomeAway",
}

DEFAULT_CHANNEL = "direct"
GUEST_AUTHORED = "guest-to-host"
CATEGORY_MAX_RATING = 10
DEFAULT_ERROR = "Failed to fetch reviews"


def category_display_name(name: str) -> str:
    """Human label for a provider category key."""
    if name in CATEGORY_DISPLAY_NAMES:
        return CATEGORY_DISPLAY_NAMES[name]
    return name[:1].upper() + name[1:].replace("_", " ")


def channel_display_name(channel: str) -> str:
    return CHANNEL_DISPLAY_NAMES.get(channel, channel)


def overall_rating(rating: Optional[float], categories: Sequence[RawCategory]) -> float:
    """Overall 0-5 rating.

    The provider rating is used as-is when present. Otherwise the mean of the
    0-10 category ratings is halved onto the 5 star scale.
    """
    if rating is not None:
        return rating
    if not categories:
        return 0.0
    mean = sum(c.rating for c in categories) / len(categories)
    return round_half_up(mean / 2, 1)


def property_ref(raw: RawReview) -> PropertyRef:
    """Property reference derived from the listing fields of a review."""
    if raw.listing_id is not None:
        property_id = str(raw.listing_id)
    else:
        property_id = slugify(raw.listing_name)

    return PropertyRef(
        id=property_id,
        name=raw.listing_name,
        short_name=short_property_name(raw.listing_name),
        location=extract_location(raw.listing_name),
    )


def normalize(
    raw: RawReview,
    approved_ids: AbstractSet[str] = frozenset(),
    now: Optional[datetime] = None,
) -> CanonicalReview:
    """Convert one provider review into a canonical review.

    Args:
        raw: Review as received from the provider
        approved_ids: Snapshot of review IDs approved for public display
        now: Instant substituted when the submission timestamp cannot be parsed

    Returns:
        Canonical review
    """
    review_id = str(raw.id)
    prop = property_ref(raw)
    channel = raw.channel_name or DEFAULT_CHANNEL

    submitted_at = parse_timestamp(raw.submitted_at)
    if submitted_at is not None:
        parsed = True
        formatted = format_display_date(submitted_at)
    else:
        logger.debug(f"Unparseable submittedAt {raw.submitted_at!r} on review {review_id}")
        parsed = False
        submitted_at = now or datetime.now(timezone.utc)
        formatted = raw.submitted_at

    categories: List[CategoryRating] = [
        CategoryRating(
            name=c.category,
            display_name=category_display_name(c.category),
            rating=c.rating,
            max_rating=CATEGORY_MAX_RATING,
        )
        for c in raw.categories
    ]

    return CanonicalReview(
        id=review_id,
        property_id=prop.id,
        property=prop,
        reviewer=raw.guest_name,
        reviewer_initials=initials(raw.guest_name),
        content=raw.public_review,
        private_notes=raw.private_review,
        overall_rating=overall_rating(raw.rating, raw.categories),
        categories=categories,
        direction="guest" if raw.type == GUEST_AUTHORED else "host",
        status=raw.status,
        channel=channel,
        channel_display_name=channel_display_name(channel),
        submitted_at=submitted_at,
        submitted_at_formatted=formatted,
        submitted_at_parsed=parsed,
        is_approved_for_display=review_id in approved_ids,
    )


def normalize_collection(
    response: ProviderResponse,
    approved_ids: AbstractSet[str] = frozenset(),
    now: Optional[datetime] = None,
) -> NormalizedResult:
    """Normalize a whole provider response.

    A failed envelope is never partially normalized: it becomes an empty
    result with success=False and the provider's message.

    Args:
        response: Provider response envelope
        approved_ids: Snapshot of review IDs approved for public display
        now: Instant substituted for unparseable timestamps

    Returns:
        Reviews newest first, with collection metadata
    """
    if not response.ok:
        logger.warning(f"Provider returned an error: {response.message}")
        return NormalizedResult.failed(response.message or DEFAULT_ERROR)

    if now is None:
        now = datetime.now(timezone.utc)

    reviews = [normalize(raw, approved_ids, now) for raw in response.result]
    reviews.sort(key=lambda r: r.submitted_at, reverse=True)

    unparsed = sum(1 for r in reviews if not r.submitted_at_parsed)
    if unparsed:
        logger.warning(f"{unparsed} review(s) had unparseable submission timestamps")

    logger.debug(f"Normalized {len(reviews)} reviews")
    return NormalizedResult(success=True, reviews=reviews, meta=collection_meta(reviews))
