import asyncio
from typing import Any

import httpx
from loguru import logger

from foryou.core.version import __version__


class BaseClient:
    """
    Base asynchronous HTTP client with optional retry logic and logging.
    A single attempt is made unless max_retries is raised.
    """

    def __init__(
        self, base_url: str = "", timeout: float = 10.0, max_retries: int = 1, headers: dict[str, str] | None = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.headers = {"User-Agent": f"ForYou/{__version__}", "Accept": "application/json"}
        self.headers.update(headers or {})
        self._client: httpx.AsyncClient | None = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx.AsyncClient instance."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, headers=self.headers, follow_redirects=True
            )
        return self._client

    async def close(self):
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send a request, raising the last error once every attempt has failed."""
        client = await self.get_client()
        last_exception: httpx.HTTPError | None = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response
            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                last_exception = e
                if attempt < self.max_retries:
                    wait_time = 0.5 * (2 ** (attempt - 1))
                    logger.warning(f"{method} {url} failed: {e}. Retrying in {wait_time}s ({attempt}/{self.max_retries})")
                    await asyncio.sleep(wait_time)

        if last_exception:
            raise last_exception
        raise httpx.RequestError("Request failed for unknown reasons")

    async def get(self, url: str, params: dict[str, Any] | None = None, **kwargs) -> Any:
        """Perform a GET request and return the decoded JSON body."""
        response = await self._request("GET", url, params=params, **kwargs)
        return response.json()
