"""Playwright-based page fetcher for JavaScript-rendered pages."""

import asyncio
import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from harvester.models.outcome import FetchResult

logger = logging.getLogger(__name__)

OPERATION_TIMEOUT = 5 * 60  # seconds, covers launch + navigation + capture
VIEWPORT = {"width": 1920, "height": 1080}

_LAUNCH_ARGS = [
    # --no-sandbox is required when running as root inside a container
    # (Docker drops the user namespace needed by Chromium's sandbox).
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-gpu",
]


class BrowserPageFetcher:
    """Render the page in headless Chromium and return the full outer HTML."""

    def __init__(self, timeout: float = OPERATION_TIMEOUT, headless: bool = True):
        self._timeout = timeout
        self._headless = headless

    async def fetch(self, url: str) -> FetchResult:
        logger.info("Rendering page with headless browser: %s", url)
        try:
            html = await asyncio.wait_for(self._render(url), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.error("Browser rendering of %s timed out after %ss", url, self._timeout)
            return FetchResult("", False, "browser timeout")
        except PlaywrightError as exc:
            logger.error("Browser rendering failed for %s: %s", url, exc)
            return FetchResult("", False, str(exc))
        return FetchResult(html, True)

    async def _render(self, url: str) -> str:
        timeout_ms = self._timeout * 1000
        async with async_playwright() as pw:
            browser = await pw.chromium.launch(headless=self._headless, args=_LAUNCH_ARGS)
            context = await browser.new_context(viewport=VIEWPORT)
            page = await context.new_page()
            try:
                await page.goto(url, wait_until="load", timeout=timeout_ms)
                return await page.evaluate("() => document.documentElement.outerHTML")
            finally:
                await context.close()
                await browser.close()
