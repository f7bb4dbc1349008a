"""Serpstat API v4 client (JSON-RPC over HTTPS)."""

import httpx
from typing import Any, Dict, Optional

from ..utils.errors import UpstreamError
from ..utils.logger import get_logger

logger = get_logger(__name__)

STATS_METHOD = "SerpstatLimitsProcedure.getStats"


class SerpstatClient:
    """Client for the Serpstat JSON-RPC API."""

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the Serpstat client.

        Args:
            base_url: API root (e.g., https://api.serpstat.com/v4)
            token: Serpstat API token, sent as the ``token`` query parameter
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Call an API method and return its ``result`` object.

        Args:
            method: Dotted method name, e.g. SerpstatDomainProcedure.getDomainsInfo
            params: Normalized method parameters

        Returns:
            The JSON-RPC ``result`` object

        Raises:
            UpstreamError: On transport failures, non-200 responses, JSON-RPC
                errors or a response without ``result``
        """
        if not self.token:
            raise UpstreamError("Serpstat API token is not configured")

        payload = {"id": 1, "method": method, "params": params or {}}
        logger.debug("Calling %s", method)

        try:
            response = self._client.post("/", params={"token": self.token}, json=payload)
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Request to Serpstat API timed out: {e}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Request to Serpstat API failed: {e}") from e

        if response.status_code != 200:
            raise UpstreamError(
                f"HTTP Error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON in Serpstat API response: {e}") from e

        if not isinstance(body, dict):
            raise UpstreamError("Unexpected Serpstat API response shape")

        error = body.get("error")
        if error:
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise UpstreamError(f"Serpstat API Error: {message}", details={"error": error})

        if "result" not in body:
            raise UpstreamError("Serpstat API response has no result")

        return body["result"]

    def test_connection(self) -> bool:
        """Check that the token works by requesting account limits.

        Returns:
            True if the stats call succeeds
        """
        try:
            self.call(STATS_METHOD)
            return True
        except UpstreamError as e:
            logger.warning("Serpstat connection test failed: %s", e.message)
            return False

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
