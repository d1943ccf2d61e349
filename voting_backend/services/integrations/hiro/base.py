"""Base async client for the Stacks node API hosted by Hiro."""

from typing import Any, Dict, Mapping, Optional

import httpx

from voting_backend.lib.logger import configure_logger

from .utils import HiroApiConnectionError, HiroApiError

logger = configure_logger(__name__)


class BaseHiroApi:
    """Base class for Hiro API clients with shared request handling.

    Requests are never retried here; retry policy belongs to the caller.
    """

    # Warn once remaining rate-limit capacity drops below this share
    RATE_LIMIT_WARNING_RATIO = 0.2

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the base API client.

        Args:
            base_url: The base URL for the API
            api_key: Optional Hiro API key sent as ``X-API-Key``
            timeout: Request timeout in seconds
            client: Pre-built client, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None
        logger.debug("Hiro API client initialized", extra={"base_url": self.base_url})

    def _build_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def _check_rate_limits(self, headers: Mapping[str, str]) -> None:
        """Log a warning when the per-minute rate limit is nearly exhausted."""
        limit = headers.get("x-ratelimit-limit-stacks-minute")
        remaining = headers.get("x-ratelimit-remaining-stacks-minute")
        if not limit or not remaining:
            return
        try:
            ratio = int(remaining) / int(limit) if int(limit) > 0 else 1
        except ValueError:
            return
        if ratio < self.RATE_LIMIT_WARNING_RATIO:
            logger.warning(
                "Rate limit capacity low",
                extra={"remaining": remaining, "limit": limit},
            )

    async def _amake_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make an HTTP request and return the decoded JSON body.

        Raises:
            HiroApiError: On a non-2xx status or an undecodable body
            HiroApiConnectionError: When no response was received
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(
            "Async API request initiated",
            extra={"request": {"method": method, "endpoint": endpoint, "url": url}},
        )

        try:
            response = await self._get_client().request(
                method, url, headers=self._build_headers(), params=params, json=json
            )
        except httpx.RequestError as e:
            logger.error(
                "Async API request failed without a response",
                extra={
                    "request": {"method": method, "endpoint": endpoint},
                    "error": str(e),
                },
            )
            raise HiroApiConnectionError(
                f"Request failed for {endpoint}: {e}", endpoint=endpoint
            ) from e

        self._check_rate_limits(response.headers)

        if response.is_error:
            logger.error(
                "Async API request failed with HTTP error",
                extra={
                    "request": {"method": method, "endpoint": endpoint},
                    "response": {"status_code": response.status_code},
                },
            )
            raise HiroApiError(
                f"HTTP {response.status_code} error for {endpoint}",
                status_code=response.status_code,
                response_body=response.text[:500],
                endpoint=endpoint,
            )

        logger.debug(
            "Async API request completed successfully",
            extra={
                "request": {"method": method, "endpoint": endpoint},
                "response": {"status_code": response.status_code},
            },
        )

        try:
            return response.json()
        except ValueError as e:
            raise HiroApiError(
                f"Invalid JSON from {endpoint}",
                status_code=response.status_code,
                response_body=response.text[:500],
                endpoint=endpoint,
            ) from e

    async def close(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._client is not None and self._owns_client:
            logger.debug("Closing Hiro API async client")
            await self._client.aclose()
        self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
