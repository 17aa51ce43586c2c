"""Tests for data models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from conftest import make_review
from review_dashboard.models.approval import ApprovalRequest, ApprovalSeed
from review_dashboard.models.criteria import FilterCriteria, SortSpec
from review_dashboard.models.performance import PropertyPerformance
from review_dashboard.models.raw import RawReview
from review_dashboard.models.review import PropertyRef


class TestRawReview:
    def test_provider_aliases(self):
        raw = RawReview.model_validate(
            {
                "id": 7453,
                "type": "host-to-guest",
                "publicReview": "Great guest",
                "reviewCategory": [{"category": "cleanliness", "rating": 10}],
                "submittedAt": "2020-08-21 22:45:14",
                "guestName": "Shane Finkelstein",
                "listingName": "2B N1 A - 29 Shoreditch Heights",
                "listingId": 1001,
                "channelName": "airbnb",
            }
        )
        assert raw.public_review == "Great guest"
        assert raw.categories[0].rating == 10
        assert raw.listing_id == 1001
        assert raw.rating is None

    def test_nulls_become_empty(self):
        raw = RawReview.model_validate(
            {"id": 1, "publicReview": None, "guestName": None, "reviewCategory": None}
        )
        assert raw.public_review == ""
        assert raw.guest_name == ""
        assert raw.categories == []

    def test_unrated_categories_dropped(self):
        review = make_review(
            reviewCategory=[
                {"category": "cleanliness", "rating": None},
                {"category": "communication", "rating": 8},
            ]
        )
        assert [c.name for c in review.categories] == ["communication"]
        assert review.overall_rating == 4.0

    def test_id_required(self):
        with pytest.raises(ValidationError):
            RawReview.model_validate({"publicReview": "No id"})


class TestApprovalRequest:
    def test_accepts_alias(self):
        request = ApprovalRequest.model_validate({"reviewId": "7453", "approved": False})
        assert request.review_id == "7453"
        assert request.approved is False

    @pytest.mark.parametrize("approved", ["true", 1, None])
    def test_approved_must_be_boolean(self, approved):
        with pytest.raises(ValidationError):
            ApprovalRequest.model_validate({"reviewId": "7453", "approved": approved})

    def test_review_id_must_be_non_empty_string(self):
        with pytest.raises(ValidationError):
            ApprovalRequest.model_validate({"reviewId": "", "approved": True})
        with pytest.raises(ValidationError):
            ApprovalRequest.model_validate({"reviewId": 7453, "approved": True})


class TestSerialization:
    def test_camel_case_output(self):
        perf = PropertyPerformance(property=PropertyRef(id="1001", name="Loft", short_name="Loft"))
        data = perf.to_dict()
        assert data["totalReviews"] == 0
        assert data["recentTrend"] == "stable"
        assert data["property"] == {"id": "1001", "name": "Loft", "shortName": "Loft"}

    def test_models_are_frozen(self):
        ref = PropertyRef(id="1001", name="Loft", short_name="Loft")
        with pytest.raises(ValidationError):
            ref.name = "Other"

    def test_seed_aliases(self):
        seed = ApprovalSeed.model_validate(
            {"approvedReviewIds": ["1"], "lastUpdated": "2024-01-15T10:00:00.000Z"}
        )
        assert seed.approved_review_ids == ["1"]


class TestCriteria:
    def test_defaults(self):
        criteria = FilterCriteria()
        assert criteria.property_id is None
        assert criteria.approved_only is False
        assert SortSpec() == SortSpec(field="date", order="desc")

    def test_naive_dates_are_utc(self):
        criteria = FilterCriteria(date_from=datetime(2024, 1, 1))
        assert criteria.date_from == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_invalid_choices_rejected(self):
        with pytest.raises(ValidationError):
            FilterCriteria(review_direction="both")
        with pytest.raises(ValidationError):
            SortSpec(field="guest")
