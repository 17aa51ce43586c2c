"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest

from review_dashboard.models.approval import ApprovalSeed
from review_dashboard.models.raw import RawReview
from review_dashboard.pipeline.normalizer import normalize
from review_dashboard.provider.hostaway import load_fixture

FIXED_NOW = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)


def make_raw(**overrides) -> RawReview:
    """Build a raw provider review using provider field names."""
    data = {
        "id": 1,
        "type": "guest-to-host",
        "status": "published",
        "rating": None,
        "publicReview": "Lovely stay",
        "reviewCategory": [],
        "submittedAt": "2024-01-10 10:00:00",
        "guestName": "Sophie Anderson",
        "listingName": "2B Shoreditch Heights - Modern Loft",
        "listingId": 1001,
        "channelName": "airbnb",
    }
    data.update(overrides)
    return RawReview.model_validate(data)


def make_review(approved_ids=frozenset(), **overrides):
    """Build a canonical review through the normalizer."""
    return normalize(make_raw(**overrides), approved_ids, FIXED_NOW)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def sample_response():
    """Bundled provider fixture."""
    return load_fixture()


@pytest.fixture
def seed():
    return ApprovalSeed(approved_review_ids=["10", "11"], last_updated="2024-01-01T00:00:00.000Z")
