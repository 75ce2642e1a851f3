"""Clicks Connector: Shorten.REST API Client.

Handles the API-key header, key probing and the single clicks fetch.
No retries and no pagination: every call is one GET.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.core.logging import get_logger, mask_key

logger = get_logger("shorten.client")


class ShortenAPIError(Exception):
    """Raised when the clicks fetch fails or returns unusable content."""

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)


class ProbeOutcome(str, Enum):
    """Result of testing a key against the clicks endpoint."""

    VALID = "valid"  # HTTP 200
    INVALID = "invalid"  # any other status
    UNREACHABLE = "unreachable"  # transport failure, no status at all

    @property
    def is_valid(self) -> bool:
        return self is ProbeOutcome.VALID


def _header_safe(api_key: Optional[str]) -> bool:
    # httpx encodes header values as ASCII
    return api_key is None or api_key.isascii()


class ShortenClient:
    """Async HTTP client for the Shorten.REST clicks endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.shorten_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.shorten_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def clicks_url(self) -> str:
        return f"{self.base_url}{settings.shorten_clicks_path}"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    @staticmethod
    def _headers(api_key: Optional[str]) -> Dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": api_key or "",
        }

    async def _get_clicks(self, api_key: Optional[str]) -> httpx.Response:
        client = await self._get_client()
        return await client.get(self.clicks_url, headers=self._headers(api_key))

    # ── Key Probe ──

    async def probe(self, api_key: Optional[str]) -> ProbeOutcome:
        """Check whether the upstream API currently accepts ``api_key``.

        Never raises for HTTP problems: transport errors are reported as
        UNREACHABLE so callers can still answer with a plain boolean.
        """
        if not _header_safe(api_key):
            logger.warning(f"Key probe skipped: {mask_key(api_key)} is not a valid header value")
            return ProbeOutcome.INVALID

        try:
            resp = await self._get_clicks(api_key)
        except httpx.HTTPError as e:
            logger.warning(
                f"Key probe for {mask_key(api_key)} could not reach upstream: {e}",
                extra={"endpoint": self.clicks_url},
            )
            return ProbeOutcome.UNREACHABLE

        outcome = ProbeOutcome.VALID if resp.status_code == 200 else ProbeOutcome.INVALID
        logger.info(
            f"Key probe for {mask_key(api_key)}: {outcome.value}",
            extra={"endpoint": self.clicks_url, "status_code": resp.status_code},
        )
        return outcome

    # ── Clicks ──

    async def fetch_clicks(self, api_key: Optional[str]) -> List[Dict[str, Any]]:
        """Fetch the raw click records for ``api_key``."""
        if not _header_safe(api_key):
            raise ShortenAPIError("Stored API key is not a valid header value")

        try:
            resp = await self._get_clicks(api_key)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ShortenAPIError(
                f"Clicks request failed with status {e.response.status_code}",
                e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ShortenAPIError(f"Clicks request failed: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise ShortenAPIError(
                "Clicks response is not valid JSON", resp.status_code
            ) from e

        clicks = body.get("clicks") if isinstance(body, dict) else None
        if not isinstance(clicks, list):
            raise ShortenAPIError(
                "Clicks response has no 'clicks' array", resp.status_code
            )
        if not all(isinstance(click, dict) for click in clicks):
            raise ShortenAPIError(
                "Clicks response contains non-object records", resp.status_code
            )

        logger.info(
            f"Fetched {len(clicks)} click records",
            extra={"endpoint": self.clicks_url, "status_code": resp.status_code},
        )
        return clicks
