"""Exceptions raised by the review dashboard."""


class ReviewDashboardError(Exception):
    """Base class for review dashboard errors."""


class InvalidApprovalRequest(ReviewDashboardError):
    """Approval mutation payload was rejected before touching the store."""

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(message)
        self.message = message


class ProviderError(ReviewDashboardError):
    """The review provider returned an error envelope or could not be reached."""
