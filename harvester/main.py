"""ASGI application serving the harvest API."""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from harvester.config import Settings, get_settings
from harvester.log import configure_logging
from harvester.routers.harvest import limiter, router as harvest_router

configure_logging(get_settings().log_level)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Harvester – Linked Document Downloader",
    description="Fetches a page, finds the document links on it, and downloads each one once.",
    version="1.0.0",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(harvest_router)


@app.get("/", summary="Health check and active configuration")
async def root(settings: Settings = Depends(get_settings)) -> dict:
    """Report the page and folder a default ``POST /harvest`` would use."""
    return {
        "status": "ok",
        "source_url": settings.source_url,
        "output_dir": settings.output_dir,
        "extension": settings.extension,
        "render_mode": settings.render_mode,
    }
