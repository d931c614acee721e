"""Command-line entry point: run one harvest pass and print a summary.

Usage:
    harvester --url https://example.com/docs --output-dir PDFs --render-mode http

Every option falls back to the matching ``HARVESTER_*`` environment variable
and then to the built-in default.
"""

import asyncio
from typing import Optional

import typer

from harvester.config import get_settings
from harvester.log import configure_logging
from harvester.services.pipeline import run_harvest

app = typer.Typer(
    name="harvester",
    help="Download every document linked from a web page.",
    add_completion=False,
)


@app.command()
def harvest(
    url: Optional[str] = typer.Option(None, "--url", help="Page to scan for document links."),
    cache_file: Optional[str] = typer.Option(None, "--cache-file", help="Local HTML cache of the page."),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Folder for downloaded files."),
    extension: Optional[str] = typer.Option(None, "--extension", "-e", help="File extension to harvest."),
    content_type: Optional[str] = typer.Option(
        None, "--content-type", help="MIME type a download must declare."
    ),
    render_mode: Optional[str] = typer.Option(
        None, "--render-mode", help="'http' for a plain GET, 'browser' for headless Chromium."
    ),
    refresh_cache: bool = typer.Option(
        False, "--refresh-cache", help="Re-fetch the page even if the cache file exists."
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level, e.g. DEBUG."),
) -> None:
    """Fetch the page, extract its document links and download each new one."""
    if render_mode is not None and render_mode not in ("http", "browser"):
        raise typer.BadParameter("must be 'http' or 'browser'", param_hint="--render-mode")

    settings = get_settings().with_overrides(
        source_url=url,
        cache_file=cache_file,
        output_dir=output_dir,
        extension=extension.lstrip(".") if extension else None,
        content_type=content_type,
        render_mode=render_mode,
        refresh_cache=refresh_cache or None,
        log_level=log_level,
    )
    configure_logging(settings.log_level)

    report = asyncio.run(run_harvest(settings))

    typer.echo(
        f"{len(report.links_found)} link(s) found: "
        f"{report.downloaded} downloaded, {report.skipped} skipped, {report.failed} failed"
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
