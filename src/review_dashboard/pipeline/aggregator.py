"""Per-property performance and collection-level metadata."""

from collections import Counter
from typing import Dict, List, Sequence

from review_dashboard.models.performance import DashboardStats, PropertyPerformance, Trend
from review_dashboard.models.result import DateRange, NormalizedResult, ResultMeta
from review_dashboard.models.review import CanonicalReview, PropertyRef
from review_dashboard.pipeline.text_utils import round_half_up, to_iso

# Trend heuristic defaults: mean of the newest TREND_WINDOW reviews against the
# TREND_WINDOW before them. Tunable, not derived from any statistical model.
TREND_WINDOW = 2
TREND_THRESHOLD = 0.3

FIVE_STAR_THRESHOLD = 4.5
LOW_RATING_THRESHOLD = 2


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def collection_meta(reviews: Sequence[CanonicalReview]) -> ResultMeta:
    """Distinct properties and channels in first-seen order, plus date range.

    Args:
        reviews: Canonical reviews

    Returns:
        Metadata for the collection
    """
    properties: Dict[str, PropertyRef] = {}
    channels: Dict[str, None] = {}
    for review in reviews:
        properties.setdefault(review.property_id, review.property)
        channels.setdefault(review.channel, None)

    date_range = DateRange()
    if reviews:
        instants = [r.submitted_at for r in reviews]
        date_range = DateRange(earliest=to_iso(min(instants)), latest=to_iso(max(instants)))

    return ResultMeta(
        total=len(reviews),
        properties=list(properties.values()),
        channels=list(channels),
        date_range=date_range,
    )


def recent_trend(
    reviews: Sequence[CanonicalReview],
    window: int = TREND_WINDOW,
    threshold: float = TREND_THRESHOLD,
) -> Trend:
    """Classify whether the newest reviews rate higher or lower than the ones before.

    Args:
        reviews: Guest reviews of one property, in any order
        window: Number of reviews in each of the recent and older groups
        threshold: Minimum difference of means to count as a change

    Returns:
        "up", "down" or "stable"
    """
    if len(reviews) < window * 2:
        return "stable"

    newest_first = sorted(reviews, key=lambda r: r.submitted_at, reverse=True)
    recent = _mean([r.overall_rating for r in newest_first[:window]])
    older = _mean([r.overall_rating for r in newest_first[window:window * 2]])

    if recent > older + threshold:
        return "up"
    if recent < older - threshold:
        return "down"
    return "stable"


def performance_for(
    reviews: Sequence[CanonicalReview],
    property: PropertyRef,
    trend_window: int = TREND_WINDOW,
    trend_threshold: float = TREND_THRESHOLD,
) -> PropertyPerformance:
    """Compute performance metrics for one property.

    Only guest-authored reviews count; host reviews of guests say nothing
    about the property.

    Args:
        reviews: Canonical reviews across all properties
        property: Property to summarize
        trend_window: Reviews per group in the trend comparison
        trend_threshold: Mean difference needed for an up/down trend

    Returns:
        Performance summary, zero-valued when the property has no guest reviews
    """
    matching = [
        r for r in reviews if r.property_id == property.id and r.direction == "guest"
    ]
    if not matching:
        return PropertyPerformance(property=property)

    distribution = {star: 0 for star in range(1, 6)}
    for review in matching:
        star = int(round_half_up(review.overall_rating, 0))
        if star in distribution:
            distribution[star] += 1

    category_ratings: Dict[str, List[float]] = {}
    for review in matching:
        for category in review.categories:
            category_ratings.setdefault(category.name, []).append(category.rating)

    return PropertyPerformance(
        property=property,
        total_reviews=len(matching),
        average_rating=round_half_up(_mean([r.overall_rating for r in matching]), 1),
        rating_distribution=distribution,
        category_averages={
            name: round_half_up(_mean(ratings), 1)
            for name, ratings in category_ratings.items()
        },
        approved_count=sum(1 for r in matching if r.is_approved_for_display),
        pending_count=sum(1 for r in matching if r.status == "pending"),
        recent_trend=recent_trend(matching, trend_window, trend_threshold),
        channel_breakdown=dict(Counter(r.channel for r in matching)),
    )


def performance_for_all(
    result: NormalizedResult,
    trend_window: int = TREND_WINDOW,
    trend_threshold: float = TREND_THRESHOLD,
) -> List[PropertyPerformance]:
    """Performance for every property listed in a result's metadata."""
    return [
        performance_for(result.reviews, prop, trend_window, trend_threshold)
        for prop in result.meta.properties
    ]


def dashboard_stats(
    reviews: Sequence[CanonicalReview],
    properties: Sequence[PropertyRef],
) -> DashboardStats:
    """Headline numbers for the dashboard overview.

    Args:
        reviews: Canonical reviews, host reviews included
        properties: Properties shown on the dashboard

    Returns:
        Stats computed over guest reviews only
    """
    guest = [r for r in reviews if r.direction == "guest"]
    if not guest:
        return DashboardStats(property_count=len(properties))

    approved = sum(1 for r in guest if r.is_approved_for_display)
    return DashboardStats(
        total_reviews=len(guest),
        property_count=len(properties),
        average_rating=round_half_up(_mean([r.overall_rating for r in guest]), 1),
        five_star_count=sum(1 for r in guest if r.overall_rating >= FIVE_STAR_THRESHOLD),
        low_rating_count=sum(1 for r in guest if r.overall_rating <= LOW_RATING_THRESHOLD),
        approved_count=approved,
        approved_percent=int(round_half_up(approved / len(guest) * 100, 0)),
    )
