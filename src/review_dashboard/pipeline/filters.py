"""Filtering and sorting of canonical review collections."""

from typing import Callable, Dict, List, Optional, Sequence

from review_dashboard.models.criteria import FilterCriteria, SortSpec
from review_dashboard.models.review import CanonicalReview

SORT_KEYS: Dict[str, Callable[[CanonicalReview], object]] = {
    "date": lambda r: r.submitted_at,
    "rating": lambda r: r.overall_rating,
    "property": lambda r: r.property.name,
    "channel": lambda r: r.channel,
}


def matches(review: CanonicalReview, criteria: FilterCriteria) -> bool:
    """Check a review against every active criterion."""
    if criteria.property_id is not None and review.property_id != criteria.property_id:
        return False
    if criteria.channel is not None and review.channel != criteria.channel:
        return False
    if criteria.min_rating is not None and review.overall_rating < criteria.min_rating:
        return False
    if criteria.max_rating is not None and review.overall_rating > criteria.max_rating:
        return False
    if criteria.review_direction not in (None, "all") and review.direction != criteria.review_direction:
        return False
    if criteria.status not in (None, "all") and review.status != criteria.status:
        return False
    if criteria.date_from is not None and review.submitted_at < criteria.date_from:
        return False
    if criteria.date_to is not None and review.submitted_at > criteria.date_to:
        return False
    if criteria.approved_only and not review.is_approved_for_display:
        return False
    return True


def filter_reviews(
    reviews: Sequence[CanonicalReview],
    criteria: Optional[FilterCriteria] = None,
) -> List[CanonicalReview]:
    """Reviews matching all criteria, in input order.

    Args:
        reviews: Canonical reviews
        criteria: Filters to apply; None or an empty FilterCriteria keeps everything

    Returns:
        Matching reviews
    """
    if criteria is None:
        return list(reviews)
    return [r for r in reviews if matches(r, criteria)]


def sort_reviews(
    reviews: Sequence[CanonicalReview],
    sort_spec: Optional[SortSpec] = None,
) -> List[CanonicalReview]:
    """Stable sort by the requested field.

    Ties keep their input order in both directions; sorted() stays stable
    with reverse=True.

    Args:
        reviews: Canonical reviews
        sort_spec: Field and order, newest first by default

    Returns:
        Sorted copy of the reviews
    """
    sort_spec = sort_spec or SortSpec()
    return sorted(reviews, key=SORT_KEYS[sort_spec.field], reverse=sort_spec.order == "desc")


def public_reviews(
    reviews: Sequence[CanonicalReview], property_id: str
) -> List[CanonicalReview]:
    """Approved guest reviews of one property, as shown on its public page."""
    return filter_reviews(
        reviews,
        FilterCriteria(property_id=property_id, review_direction="guest", approved_only=True),
    )
