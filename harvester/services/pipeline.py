"""Single-pass harvest: page → cache → links → downloads.

::

    ensure output dir → (cache missing? fetch + cache) → read cache
        → extract links → dedupe + validate → download each, in order

A failure for one link is logged and the loop moves on; the run always
completes and reports what happened.
"""

import logging
from typing import List, Optional

import httpx

from harvester.config import Settings
from harvester.models.outcome import DownloadResult, HarvestReport
from harvester.services.browser_fetcher import BrowserPageFetcher
from harvester.services.downloader import download_document
from harvester.services.fetcher import DEFAULT_HEADERS, HttpPageFetcher, PageFetcher
from harvester.services.filesystem import ensure_directory, file_exists, read_text, write_cache
from harvester.services.link_extractor import extract_links, remove_duplicates
from harvester.services.validator import is_valid_url, validate_url

logger = logging.getLogger(__name__)


def get_page_fetcher(settings: Settings) -> PageFetcher:
    """Return the page fetcher selected by ``settings.render_mode``."""
    if settings.render_mode == "browser":
        return BrowserPageFetcher(timeout=settings.page_timeout, headless=settings.headless)
    return HttpPageFetcher()


async def ensure_page_cache(settings: Settings, fetcher: PageFetcher) -> bool:
    """Make sure the local HTML cache exists, fetching the page if needed.

    The cache is only written when the fetch succeeded, so a failed fetch is
    retried on the next run instead of leaving an empty cache behind.
    """
    if file_exists(settings.cache_file) and not settings.refresh_cache:
        logger.info("Using cached page %s", settings.cache_file)
        return True

    try:
        validate_url(settings.source_url, block_private=settings.block_private_hosts)
    except ValueError as exc:
        logger.error("Refusing to fetch %s: %s", settings.source_url, exc)
        return False

    result = await fetcher.fetch(settings.source_url)
    if not result.ok or not result.content:
        logger.error(
            "Could not fetch %s (%s); nothing to process",
            settings.source_url,
            result.error or "empty page",
        )
        return False
    return write_cache(settings.cache_file, result.content)


def collect_links(html: str, settings: Settings) -> List[str]:
    """Extract, deduplicate and validate the document links found in *html*."""
    links = remove_duplicates(extract_links(html, settings.extension))
    valid: List[str] = []
    for link in links:
        if is_valid_url(link, block_private=settings.block_private_hosts):
            valid.append(link)
        else:
            logger.warning("Skipping invalid URL: %s", link)
    return valid


async def run_harvest(
    settings: Settings,
    fetcher: Optional[PageFetcher] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> HarvestReport:
    """Run the whole pipeline once with *settings* and return a report."""
    ensure_directory(settings.output_dir)

    if fetcher is None:
        fetcher = get_page_fetcher(settings)
    await ensure_page_cache(settings, fetcher)

    html = read_text(settings.cache_file) if file_exists(settings.cache_file) else ""
    links = collect_links(html, settings)
    logger.info("Found %d %s link(s) on %s", len(links), settings.extension, settings.source_url)

    results: List[DownloadResult] = []
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.download_timeout, headers=DEFAULT_HEADERS)
    try:
        for link in links:
            results.append(
                await download_document(
                    link,
                    settings.output_dir,
                    client,
                    extension=settings.extension,
                    content_type=settings.content_type,
                    block_private=settings.block_private_hosts,
                )
            )
    finally:
        if owns_client:
            await client.aclose()

    report = HarvestReport(settings.source_url, links, results)
    logger.info(
        "Harvest finished: %d downloaded, %d skipped, %d failed",
        report.downloaded,
        report.skipped,
        report.failed,
    )
    return report
