"""Hostaway reviews API client with fixture fallback."""

import json
from importlib import resources
from typing import Optional
import httpx
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from review_dashboard.config import Settings, settings as default_settings
from review_dashboard.errors import ProviderError
from review_dashboard.models.raw import ProviderResponse
from review_dashboard.utils.logging import logger

FIXTURE_RESOURCE = "mock_reviews.json"


def load_fixture() -> ProviderResponse:
    """Load the bundled sample provider response."""
    text = resources.files("review_dashboard.data").joinpath(FIXTURE_RESOURCE).read_text(
        encoding="utf-8"
    )
    return ProviderResponse.from_payload(json.loads(text))


def _is_retryable(exc: BaseException) -> bool:
    """Transport failures and 5xx responses are worth another attempt."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


class HostawayClient:
    """Fetch reviews from Hostaway, falling back to bundled sample data.

    The sandbox account returns no reviews, so an empty result is treated the
    same as a failure: the fixture is served instead.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize provider client.

        Args:
            settings: Application settings; the global instance when omitted
            client: HTTP client to use, created from settings when omitted
        """
        self.settings = settings or default_settings
        self.client = client or httpx.AsyncClient(
            base_url=self.settings.provider_base_url,
            timeout=self.settings.request_timeout,
        )

    async def close(self) -> None:
        """Close HTTP client."""
        if not self.client.is_closed:
            await self.client.aclose()

    async def _request(self) -> ProviderResponse:
        """Single GET of the reviews endpoint.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            ProviderError: If the body is not a JSON object
        """
        params = {}
        if self.settings.provider_account_id:
            params["accountId"] = self.settings.provider_account_id

        response = await self.client.get(
            "/reviews",
            headers={
                "Authorization": f"Bearer {self.settings.provider_api_key}",
                "Content-Type": "application/json",
            },
            params=params,
        )
        response.raise_for_status()

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError(f"Provider returned invalid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise ProviderError("Provider returned an unexpected payload")

        return ProviderResponse.from_payload(payload)

    async def fetch_live(self) -> ProviderResponse:
        """Fetch from the provider, retrying transient failures.

        Returns:
            Provider response envelope

        Raises:
            httpx.HTTPError: If every attempt failed
            ProviderError: If the body could not be decoded
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max(1, self.settings.retry_attempts)),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        ):
            with attempt:
                logger.debug(
                    f"Fetching reviews from {self.settings.provider_base_url} "
                    f"(attempt {attempt.retry_state.attempt_number})"
                )
                return await self._request()

        raise ProviderError("No fetch attempt was made")

    async def fetch_reviews(self) -> ProviderResponse:
        """Fetch reviews, serving the fixture when the provider has nothing usable.

        Returns:
            Live provider response, or the bundled sample data
        """
        if not self.settings.provider_enabled:
            logger.debug("Provider disabled, using sample data")
            return load_fixture()

        try:
            response = await self.fetch_live()
        except (httpx.HTTPError, ProviderError) as e:
            logger.warning(f"Hostaway API unavailable, using sample data: {e}")
            return load_fixture()

        if not response.ok:
            logger.warning(f"Hostaway API returned an error, using sample data: {response.message}")
            return load_fixture()

        if not response.result:
            logger.info("Hostaway API returned no reviews, using sample data")
            return load_fixture()

        logger.info(f"Fetched {len(response.result)} reviews from Hostaway")
        return response

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
