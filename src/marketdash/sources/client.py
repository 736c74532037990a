"""Async HTTP client for third-party CSV/JSON sources with retry.

Wraps a shared httpx.AsyncClient. Transport errors, 429 and 5xx responses
are retried with exponential backoff; other non-2xx statuses fail at once.
All failures surface as UpstreamError so callers can decide whether a
missing body means "absent record" or "report an upstream error".
"""

import asyncio

import httpx

from marketdash.config import UpstreamSettings
from marketdash.exceptions import UpstreamError
from marketdash.logging import get_logger

logger = get_logger(__name__)

CSV_ACCEPT = "text/csv,*/*"
TEXT_ACCEPT = "text/csv,text/plain,*/*"
JSON_ACCEPT = "application/json,*/*"


def _is_retryable(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


class UpstreamClient:
    """Fetches raw upstream bodies.

    Usage:
        client = UpstreamClient(settings.upstream)
        text = await client.fetch_text(url, params={"s": "nvda.us", "i": "d"})
        await client.close()
    """

    def __init__(
        self,
        settings: UpstreamSettings,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._http = http or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.timeout_seconds),
            headers={"user-agent": settings.user_agent},
            follow_redirects=True,
        )

    async def close(self) -> None:
        """Release pooled connections."""
        await self._http.aclose()

    async def fetch_text(
        self,
        url: str,
        params: dict[str, str] | None = None,
        accept: str = CSV_ACCEPT,
    ) -> str:
        """GET a URL and return the decoded body text.

        Raises:
            UpstreamError: On a non-retryable status, or once retries run out.
        """
        response = await self._get_with_retry(url, params, accept)
        return response.text

    async def fetch_json(self, url: str, params: dict[str, str] | None = None) -> object:
        """GET a URL and decode its JSON body.

        Raises:
            UpstreamError: On fetch failure or a body that is not valid JSON.
        """
        response = await self._get_with_retry(url, params, JSON_ACCEPT)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from {url}: {e}") from e

    async def _get_with_retry(
        self, url: str, params: dict[str, str] | None, accept: str
    ) -> httpx.Response:
        """Execute a GET with exponential backoff retry.

        Delays: base, 2*base, 4*base, ... between attempts.
        """
        max_retries = max(self._settings.max_retries, 1)
        base_delay = self._settings.retry_base_delay

        for attempt in range(max_retries):
            try:
                response = await self._http.get(url, params=params, headers={"accept": accept})
            except httpx.TransportError as e:
                error: UpstreamError = UpstreamError(f"Upstream request failed for {url}: {e}")
                retryable = True
            else:
                if response.is_success:
                    return response
                error = UpstreamError(
                    f"Upstream error: {response.status_code} {response.reason_phrase}",
                    status_code=response.status_code,
                )
                retryable = _is_retryable(response.status_code)

            if not retryable or attempt == max_retries - 1:
                logger.error(
                    "upstream_fetch_failed",
                    url=url,
                    error=str(error),
                    attempts=attempt + 1,
                )
                raise error

            delay = base_delay * (2**attempt)
            logger.warning(
                "upstream_fetch_retry",
                url=url,
                attempt=attempt + 1,
                max_retries=max_retries,
                delay=delay,
                error=str(error),
            )
            await asyncio.sleep(delay)

        raise UpstreamError(f"Upstream request failed for {url}")  # Unreachable
