"""Tests for the Hostaway provider client."""

import httpx
import pytest

from review_dashboard.config import Settings
from review_dashboard.provider.hostaway import HostawayClient, load_fixture

BASE_URL = "https://api.test/v1"

LIVE_PAYLOAD = {
    "status": "success",
    "result": [
        {
            "id": 1,
            "type": "guest-to-host",
            "status": "published",
            "rating": 4.0,
            "publicReview": "Live review",
            "reviewCategory": [],
            "submittedAt": "2024-01-01 00:00:00",
            "guestName": "Live Guest",
            "listingName": "Live Listing",
        }
    ],
}


def _client(handler, **overrides):
    settings = Settings(
        **{
            "provider_enabled": True,
            "provider_base_url": BASE_URL,
            "provider_api_key": "secret",
            "retry_attempts": 1,
            **overrides,
        }
    )
    transport = httpx.MockTransport(handler)
    return HostawayClient(settings, httpx.AsyncClient(base_url=BASE_URL, transport=transport))


class TestLoadFixture:
    def test_fixture_is_successful_response(self):
        response = load_fixture()
        assert response.ok
        assert len(response.result) > 0


class TestHostawayClient:
    @pytest.mark.asyncio
    async def test_disabled_provider_uses_fixture(self):
        def handler(request):
            raise AssertionError("provider should not be called")

        client = _client(handler)
        client.settings.provider_enabled = False
        async with client:
            response = await client.fetch_reviews()
        assert response == load_fixture()

    @pytest.mark.asyncio
    async def test_live_results_returned(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json=LIVE_PAYLOAD)

        async with _client(handler, provider_account_id="61148") as client:
            response = await client.fetch_reviews()

        assert [r.guest_name for r in response.result] == ["Live Guest"]
        assert seen["url"] == f"{BASE_URL}/reviews?accountId=61148"
        assert seen["auth"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_empty_result_falls_back(self):
        async with _client(lambda r: httpx.Response(200, json={"status": "success", "result": []})) as client:
            response = await client.fetch_reviews()
        assert response == load_fixture()

    @pytest.mark.asyncio
    async def test_error_envelope_falls_back(self):
        payload = {"status": "error", "result": [], "message": "Unauthorized"}
        async with _client(lambda r: httpx.Response(200, json=payload)) as client:
            response = await client.fetch_reviews()
        assert response == load_fixture()

    @pytest.mark.asyncio
    async def test_http_error_falls_back(self):
        async with _client(lambda r: httpx.Response(403)) as client:
            response = await client.fetch_reviews()
        assert response == load_fixture()

    @pytest.mark.asyncio
    async def test_invalid_json_falls_back(self):
        async with _client(lambda r: httpx.Response(200, text="<html>")) as client:
            response = await client.fetch_reviews()
        assert response == load_fixture()

    @pytest.mark.asyncio
    async def test_transport_error_falls_back(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        async with _client(handler) as client:
            response = await client.fetch_reviews()
        assert response == load_fixture()

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(401)

        async with _client(handler, retry_attempts=3) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.fetch_live()
        assert len(calls) == 1


class TestMalformedEnvelope:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"status": "success", "result": 5},
            {"status": "error", "message": {"code": 1}},
        ],
    )
    async def test_falls_back_to_fixture(self, payload):
        async with _client(lambda r: httpx.Response(200, json=payload)) as client:
            response = await client.fetch_reviews()
        assert response == load_fixture()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = _client(lambda r: httpx.Response(200, json=LIVE_PAYLOAD))
        await client.close()
        await client.close()
        assert client.client.is_closed
