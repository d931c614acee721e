import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from harvester.config import Settings, get_settings
from harvester.models.harvest_request import HarvestRequest
from harvester.models.harvest_response import DocumentResult, HarvestResponse
from harvester.models.outcome import HarvestReport
from harvester.services.pipeline import run_harvest
from harvester.services.validator import validate_url

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()

# Runs share the cache file and output directory, so only one may be active.
_run_lock = asyncio.Lock()


@router.post("/harvest", response_model=HarvestResponse, summary="Harvest documents linked from a page")
@limiter.limit("5/minute")
async def harvest(
    request: Request,
    body: HarvestRequest,
    settings: Settings = Depends(get_settings),
) -> HarvestResponse:
    """Run one harvest pass and report the outcome of every document link.

    Fields left out of the request body fall back to the server settings.
    A caller-supplied ``url`` must not point at a private or internal
    address; the same rule then applies to every link and redirect of that
    run.  Harvesting a page other than the configured one always re-fetches
    it, since the local cache file holds the configured page.
    """
    url = str(body.url) if body.url else None
    if url:
        try:
            validate_url(url, block_private=True)
        except ValueError as exc:
            logger.warning("Invalid or blocked URL: %s – %s", url, exc)
            raise HTTPException(status_code=400, detail=str(exc))

    refresh_cache = body.refresh_cache
    if refresh_cache is None and url and url != settings.source_url:
        refresh_cache = True

    run_settings = settings.with_overrides(
        source_url=url,
        render_mode=body.render_mode,
        extension=body.extension.lstrip(".") if body.extension else None,
        content_type=body.content_type,
        refresh_cache=refresh_cache,
        block_private_hosts=True if url else None,
    )
    logger.info(
        "Harvest request received",
        extra={"url": run_settings.source_url, "render_mode": run_settings.render_mode},
    )

    report = await run_exclusive(run_settings)

    return HarvestResponse(
        source_url=report.source_url,
        links_found=len(report.links_found),
        downloaded=report.downloaded,
        skipped=report.skipped,
        failed=report.failed,
        documents=[DocumentResult(**result._asdict()) for result in report.results],
    )


async def run_exclusive(settings: Settings) -> HarvestReport:
    """Run the pipeline once no other run in this process is in progress."""
    async with _run_lock:
        return await run_harvest(settings)
