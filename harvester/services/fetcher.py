import logging
from typing import Protocol

import httpx

from harvester.models.outcome import FetchResult

logger = logging.getLogger(__name__)

TIMEOUT = 5.0  # seconds, the httpx client default
DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; harvester/1.0)",
}


class PageFetcher(Protocol):
    """Anything that can turn a page URL into its HTML.

    Implementations never raise for network problems; they log and return an
    empty, non-ok :class:`FetchResult` instead.
    """

    async def fetch(self, url: str) -> FetchResult:
        ...


class HttpPageFetcher:
    """Plain HTTP GET of the page, without running any JavaScript."""

    def __init__(self, timeout: float = TIMEOUT):
        self._timeout = timeout

    async def fetch(self, url: str) -> FetchResult:
        logger.info("Fetching page over HTTP: %s", url)
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=self._timeout,
                headers=DEFAULT_HEADERS,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return FetchResult(response.text, True)
        except httpx.HTTPStatusError as exc:
            logger.error("HTTP error fetching %s: %s", url, exc.response.status_code)
            return FetchResult("", False, f"HTTP {exc.response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Error fetching %s: %s", url, exc)
            return FetchResult("", False, str(exc) or exc.__class__.__name__)
