from typing import Any

import httpx
from loguru import logger

from foryou.core.base_client import BaseClient
from foryou.core.config import settings


class RemoteWeightsClient(BaseClient):
    """Fetches server-configured recommendation weights. One attempt per call, no retries."""

    def __init__(self, url: str | None = None, timeout: float | None = None):
        super().__init__(timeout=timeout or settings.REMOTE_CONFIG_TIMEOUT_SECONDS, max_retries=1)
        self.url = settings.REMOTE_CONFIG_URL if url is None else url

    async def fetch(self) -> Any | None:
        """
        Return the decoded configuration body, or None when no endpoint is configured,
        the request fails or times out, the status is not a success, or the body is not JSON.
        """
        if not self.url:
            return None
        try:
            return await self.get(self.url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Remote weight fetch from {self.url} failed: {e}")
        except ValueError as e:
            logger.warning(f"Remote weight fetch from {self.url} returned invalid JSON: {e}")
        return None
