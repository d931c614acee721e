"""Tests for the HTTP and headless-browser page fetchers.

The browser is never launched: ``BrowserPageFetcher._render`` is replaced
with lightweight fakes.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import respx
from playwright.async_api import Error as PlaywrightError

from harvester.config import Settings
from harvester.services.browser_fetcher import BrowserPageFetcher
from harvester.services.fetcher import HttpPageFetcher
from harvester.services.pipeline import get_page_fetcher

PAGE_URL = "https://www.example.test/en/SDS"
HTML = '<html><body><a href="https://cdn.example.test/a.pdf">A</a></body></html>'


class TestHttpPageFetcher:
    def test_returns_body(self):
        with respx.mock:
            respx.get(PAGE_URL).mock(return_value=httpx.Response(200, text=HTML))
            result = asyncio.run(HttpPageFetcher().fetch(PAGE_URL))

        assert result.ok is True
        assert result.content == HTML

    def test_follows_redirects(self):
        with respx.mock:
            respx.get(PAGE_URL).mock(
                return_value=httpx.Response(301, headers={"Location": PAGE_URL + "/"})
            )
            respx.get(PAGE_URL + "/").mock(return_value=httpx.Response(200, text=HTML))
            result = asyncio.run(HttpPageFetcher().fetch(PAGE_URL))

        assert result.ok is True
        assert result.content == HTML

    def test_non_2xx_returns_empty(self):
        with respx.mock:
            respx.get(PAGE_URL).mock(return_value=httpx.Response(503, text="down"))
            result = asyncio.run(HttpPageFetcher().fetch(PAGE_URL))

        assert result.ok is False
        assert result.content == ""
        assert result.error == "HTTP 503"

    def test_invalid_url_returns_empty(self):
        with respx.mock(assert_all_called=False):
            result = asyncio.run(HttpPageFetcher().fetch("https://www.example.test:abc/en"))

        assert result.ok is False
        assert result.content == ""

    def test_transport_error_returns_empty(self):
        with respx.mock:
            respx.get(PAGE_URL).mock(side_effect=httpx.ConnectError("refused"))
            result = asyncio.run(HttpPageFetcher().fetch(PAGE_URL))

        assert result.ok is False
        assert result.content == ""


class TestBrowserPageFetcher:
    def test_returns_rendered_html(self):
        with patch.object(BrowserPageFetcher, "_render", new=AsyncMock(return_value=HTML)):
            result = asyncio.run(BrowserPageFetcher().fetch(PAGE_URL))

        assert result.ok is True
        assert result.content == HTML

    def test_browser_error_returns_empty(self):
        with patch.object(
            BrowserPageFetcher, "_render", new=AsyncMock(side_effect=PlaywrightError("crashed"))
        ):
            result = asyncio.run(BrowserPageFetcher().fetch(PAGE_URL))

        assert result.ok is False
        assert result.content == ""

    def test_timeout_returns_empty(self):
        async def slow_render(self, url):
            await asyncio.sleep(5)
            return HTML

        with patch.object(BrowserPageFetcher, "_render", new=slow_render):
            result = asyncio.run(BrowserPageFetcher(timeout=0.05).fetch(PAGE_URL))

        assert result.ok is False
        assert result.error == "browser timeout"


def _fake_playwright(page):
    """Build an ``async_playwright()`` stand-in whose browser serves *page*."""
    context = AsyncMock()
    context.new_page.return_value = page
    browser = AsyncMock()
    browser.new_context.return_value = context
    pw = MagicMock()
    pw.chromium.launch = AsyncMock(return_value=browser)
    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=pw)
    manager.__aexit__ = AsyncMock(return_value=False)
    return manager, pw, browser, context


class TestBrowserRender:
    def test_launches_navigates_and_closes(self):
        page = AsyncMock()
        page.evaluate.return_value = HTML
        manager, pw, browser, context = _fake_playwright(page)

        with patch("harvester.services.browser_fetcher.async_playwright", return_value=manager):
            result = asyncio.run(BrowserPageFetcher(timeout=60, headless=False).fetch(PAGE_URL))

        assert result.ok is True
        assert result.content == HTML
        launch_kwargs = pw.chromium.launch.await_args.kwargs
        assert launch_kwargs["headless"] is False
        assert "--no-sandbox" in launch_kwargs["args"]
        browser.new_context.assert_awaited_once_with(viewport={"width": 1920, "height": 1080})
        page.goto.assert_awaited_once_with(PAGE_URL, wait_until="load", timeout=60000)
        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()

    def test_navigation_error_still_closes_browser(self):
        page = AsyncMock()
        page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
        manager, _, browser, context = _fake_playwright(page)

        with patch("harvester.services.browser_fetcher.async_playwright", return_value=manager):
            result = asyncio.run(BrowserPageFetcher().fetch(PAGE_URL))

        assert result.ok is False
        assert result.content == ""
        page.evaluate.assert_not_awaited()
        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()


class TestGetPageFetcher:
    def test_http_mode(self):
        assert isinstance(get_page_fetcher(Settings(render_mode="http")), HttpPageFetcher)

    def test_browser_mode(self):
        fetcher = get_page_fetcher(Settings(render_mode="browser", page_timeout=12))
        assert isinstance(fetcher, BrowserPageFetcher)
        assert fetcher._timeout == 12
