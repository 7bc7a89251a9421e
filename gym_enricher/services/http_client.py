"""HTTP client service for calling place-data providers."""
import asyncio
from typing import Any, Dict, Optional

import httpx

from ..config import settings

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36"
)


class HTTPClient:
    """Async HTTP client shared by the providers of one update cycle."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the HTTP client.

        Args:
            timeout: Default request timeout in seconds. Defaults to settings.provider_timeout
            transport: Optional httpx transport, used to stub providers in tests
        """
        self.timeout = timeout or settings.provider_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]],
        headers: Optional[Dict[str, str]],
        timeout: Optional[float],
        max_retries: int,
    ) -> tuple[Optional[httpx.Response], Optional[str]]:
        if not self._client:
            raise RuntimeError("HTTPClient must be used as an async context manager")

        last_error = None

        for attempt in range(max_retries):
            try:
                response = await self._client.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=timeout or self.timeout,
                )
                response.raise_for_status()
                return response, None

            except httpx.HTTPStatusError as e:
                last_error = f"HTTP {e.response.status_code}: {e.response.reason_phrase}"
                # Don't retry on 4xx errors (client errors)
                if 400 <= e.response.status_code < 500:
                    break

            except httpx.TimeoutException:
                last_error = f"Request timed out after {timeout or self.timeout} seconds"

            except httpx.RequestError as e:
                last_error = f"Request failed: {str(e)}"

            # Wait a bit before retrying (exponential backoff)
            if attempt < max_retries - 1:
                await asyncio.sleep(2**attempt)

        return None, last_error or "Unknown error occurred"

    async def fetch_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        max_retries: int = 1,
    ) -> tuple[Optional[Any], Optional[str]]:
        """Fetch and decode a JSON document.

        Returns:
            Tuple of (payload, error_message)
            If successful, returns (payload, None)
            If failed, returns (None, error_message)
        """
        response, error = await self._get(url, params, headers, timeout, max_retries)
        if response is None:
            return None, error

        try:
            return response.json(), None
        except ValueError as e:
            return None, f"Invalid JSON from {url}: {e}"

    async def fetch_url(
        self,
        url: str,
        timeout: Optional[float] = None,
        max_retries: int = 1,
    ) -> tuple[str, Optional[str]]:
        """Fetch HTML content from a URL.

        Returns:
            Tuple of (html_content, error_message)
            If successful, returns (html, None)
            If failed, returns ("", error_message)
        """
        response, error = await self._get(url, None, None, timeout, max_retries)
        if response is None:
            return "", error
        return response.text, None
