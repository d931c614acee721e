"""Runtime settings for the harvester.

Values are read once from ``HARVESTER_*`` environment variables (or a local
``.env`` file) and stay fixed for the duration of a run.  Per-run overrides
are applied to a copy via :meth:`Settings.with_overrides`.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RenderMode = Literal["http", "browser"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HARVESTER_",
        env_file=".env",
        extra="ignore",
    )

    source_url: str = "https://www.gojo.com/en/SDS"
    cache_file: str = "gojo.html"
    output_dir: str = "PDFs"
    extension: str = "pdf"
    content_type: str = "application/pdf"
    render_mode: RenderMode = "browser"
    """``"http"`` for a plain GET, ``"browser"`` for a headless Chromium render."""

    download_timeout: float = Field(default=30.0, gt=0)
    page_timeout: float = Field(default=300.0, gt=0)
    headless: bool = True
    block_private_hosts: bool = False
    refresh_cache: bool = False
    log_level: str = "INFO"

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with every non-``None`` override applied."""
        update = {key: value for key, value in overrides.items() if value is not None}
        return self.model_copy(update=update)


@lru_cache
def get_settings() -> Settings:
    return Settings()
