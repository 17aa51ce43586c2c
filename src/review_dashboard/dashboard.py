"""Review dashboard service.

Wires the provider client, the approval store and the pure pipeline
functions together. The approval store is injected; which backend it uses is
decided once by the caller (see storage.create_approval_store).
"""

from datetime import datetime
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from review_dashboard.config import Settings, settings as default_settings
from review_dashboard.errors import InvalidApprovalRequest
from review_dashboard.models.approval import ApprovalRequest, ApprovalResult, ApprovalSnapshot
from review_dashboard.models.criteria import FilterCriteria, SortSpec
from review_dashboard.models.performance import DashboardStats, PropertyPerformance
from review_dashboard.models.result import NormalizedResult
from review_dashboard.models.review import CanonicalReview
from review_dashboard.pipeline.aggregator import dashboard_stats, performance_for_all
from review_dashboard.pipeline.filters import filter_reviews, public_reviews, sort_reviews
from review_dashboard.pipeline.normalizer import normalize_collection
from review_dashboard.provider.hostaway import HostawayClient
from review_dashboard.storage.approval_store import ApprovalStore
from review_dashboard.utils.logging import logger


class ReviewDashboard:
    """Manager-facing operations over normalized reviews."""

    def __init__(
        self,
        client: HostawayClient,
        store: ApprovalStore,
        settings: Optional[Settings] = None,
    ):
        """Initialize dashboard service.

        Args:
            client: Provider client
            store: Approval store
            settings: Application settings; the global instance when omitted
        """
        self.client = client
        self.store = store
        self.settings = settings or default_settings

    async def load(self, now: Optional[datetime] = None) -> NormalizedResult:
        """Fetch and normalize reviews.

        Approval flags come from the store's state at call time, so a load
        after set_approval() reflects the change.

        Args:
            now: Instant substituted for unparseable timestamps

        Returns:
            Normalized result; check success before using reviews
        """
        response = await self.client.fetch_reviews()
        result = normalize_collection(response, self.store.current_ids(), now)

        if result.success:
            logger.info(
                f"Loaded {result.meta.total} reviews across "
                f"{len(result.meta.properties)} properties"
            )
        return result

    def query(
        self,
        result: NormalizedResult,
        criteria: Optional[FilterCriteria] = None,
        sort: Optional[SortSpec] = None,
    ) -> NormalizedResult:
        """Filter and sort a loaded result.

        Args:
            result: Result from load()
            criteria: Filters to apply
            sort: Sort order, newest first by default

        Returns:
            Result holding the matching reviews; meta.total counts matches and
            meta.unfilteredTotal counts everything loaded
        """
        if not result.success:
            return result

        reviews = sort_reviews(filter_reviews(result.reviews, criteria), sort)
        meta = result.meta.model_copy(
            update={"total": len(reviews), "unfiltered_total": len(result.reviews)}
        )
        return result.model_copy(update={"reviews": reviews, "meta": meta})

    def performance(self, result: NormalizedResult) -> List[PropertyPerformance]:
        """Performance summary for every property in the result."""
        return performance_for_all(
            result,
            trend_window=self.settings.trend_window,
            trend_threshold=self.settings.trend_threshold,
        )

    def stats(self, result: NormalizedResult) -> DashboardStats:
        return dashboard_stats(result.reviews, result.meta.properties)

    def public_reviews(self, result: NormalizedResult, property_id: str) -> List[CanonicalReview]:
        """Reviews to show on a property's public page."""
        return public_reviews(result.reviews, property_id)

    def set_approval(self, payload: Mapping[str, Any]) -> ApprovalResult:
        """Apply an approval change request.

        Args:
            payload: Request body with reviewId and approved

        Returns:
            Outcome including the new number of approved reviews

        Raises:
            InvalidApprovalRequest: If reviewId is missing or empty, or approved
                is not a boolean. The store is not touched.
        """
        try:
            request = ApprovalRequest.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Rejected approval request {payload!r}: {e.error_count()} error(s)")
            raise InvalidApprovalRequest() from e

        self.store.set_approval(request.review_id, request.approved)
        total = len(self.store.current_ids())

        logger.info(
            f"Review {request.review_id} {'approved' if request.approved else 'unapproved'} "
            f"({total} approved)"
        )
        return ApprovalResult(
            review_id=request.review_id,
            approved=request.approved,
            total_approved=total,
        )

    def approvals(self) -> ApprovalSnapshot:
        """Current approval state."""
        return self.store.snapshot()
