from typing import Literal, Optional

from pydantic import BaseModel, Field, HttpUrl


class HarvestRequest(BaseModel):
    url: Optional[HttpUrl] = None
    """Page to harvest.  Defaults to the configured ``source_url``."""

    render_mode: Optional[Literal["http", "browser"]] = None
    extension: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=10,
        pattern=r"^\.?[A-Za-z0-9]+$",
        description="File extension to look for, e.g. 'pdf'.",
    )
    content_type: Optional[str] = Field(
        default=None,
        description="MIME type a download must declare, e.g. 'application/pdf'.",
    )
    refresh_cache: Optional[bool] = None
