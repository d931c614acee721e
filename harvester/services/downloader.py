"""Fetch-validate-write sequence for a single remote document.

The response is buffered completely and checked before the destination file
is opened, so a failed or empty download never leaves a file behind.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator
from urllib.parse import urljoin

import httpx

from harvester.models.outcome import DownloadResult
from harvester.services.filename import url_to_filename
from harvester.services.filesystem import file_exists
from harvester.services.validator import validate_url

logger = logging.getLogger(__name__)

EXPECTED_CONTENT_TYPE = "application/pdf"
MAX_REDIRECTS = 10


class TooManyRedirects(Exception):
    pass


@asynccontextmanager
async def _follow_redirects(
    client: httpx.AsyncClient, url: str, block_private: bool
) -> AsyncIterator[httpx.Response]:
    """Stream GET *url*, following redirects by hand.

    Every redirect target is validated before it is requested, so a public
    link cannot bounce the download to an internal address.

    Raises:
        ValueError: if a redirect target fails validation.
        TooManyRedirects: after MAX_REDIRECTS hops.
        httpx.HTTPError: on network errors.
    """
    current_url = url
    for _ in range(MAX_REDIRECTS + 1):
        async with client.stream("GET", current_url, follow_redirects=False) as response:
            if response.is_redirect:
                location = response.headers.get("location", "")
                next_url = urljoin(current_url, location)
                validate_url(next_url, block_private=block_private)
                logger.debug("Following redirect %s -> %s", current_url, next_url)
                current_url = next_url
                continue

            yield response
            return

    raise TooManyRedirects(f"Too many redirects (more than {MAX_REDIRECTS}).")


async def download_document(
    url: str,
    output_dir: str,
    client: httpx.AsyncClient,
    *,
    extension: str = "pdf",
    content_type: str = EXPECTED_CONTENT_TYPE,
    block_private: bool = False,
) -> DownloadResult:
    """Download *url* into *output_dir* unless it is already there.

    Redirects are followed; with *block_private* set, every hop must pass
    the private-address check.  Never raises for a per-document problem;
    the returned :class:`DownloadResult` says what happened.
    """
    try:
        filename = url_to_filename(url, extension)
    except ValueError as exc:
        logger.warning("Rejecting %s: %s", url, exc)
        return DownloadResult(url, "", "failed", "invalid_url", str(exc))

    path = os.path.join(output_dir, filename)

    if file_exists(path):
        logger.info("File already exists, skipping: %s", path)
        return DownloadResult(url, path, "skipped")

    try:
        async with _follow_redirects(client, url, block_private) as response:
            if response.status_code != 200:
                logger.warning("Download failed for %s: HTTP %s", url, response.status_code)
                return DownloadResult(
                    url, path, "failed", "bad_status", f"HTTP {response.status_code}"
                )

            declared = response.headers.get("content-type", "")
            if content_type not in declared:
                logger.warning(
                    "Invalid content type for %s: %r (expected %s)", url, declared, content_type
                )
                return DownloadResult(url, path, "failed", "bad_content_type", declared)

            body = await response.aread()
    except (ValueError, httpx.InvalidURL) as exc:
        logger.warning("Rejecting %s: %s", url, exc)
        return DownloadResult(url, path, "failed", "invalid_url", str(exc))
    except TooManyRedirects as exc:
        logger.warning("Download failed for %s: %s", url, exc)
        return DownloadResult(url, path, "failed", "bad_status", str(exc))
    except httpx.HTTPError as exc:
        logger.error("Failed to download %s: %s", url, exc)
        return DownloadResult(url, path, "failed", "transport", str(exc) or exc.__class__.__name__)

    if not body:
        logger.warning("Downloaded 0 bytes for %s; not creating file", url)
        return DownloadResult(url, path, "failed", "empty_body")

    try:
        with open(path, "wb") as fh:
            fh.write(body)
    except OSError as exc:
        logger.error("Failed to write %s to %s: %s", url, path, exc)
        return DownloadResult(url, path, "failed", "filesystem", str(exc))

    logger.info("Downloaded %d bytes: %s -> %s", len(body), url, path)
    return DownloadResult(url, path, "downloaded", bytes_written=len(body))
