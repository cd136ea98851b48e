"""
Command-line interface for pagesnap.

Commands:
- serve: Run the HTTP API under uvicorn
- capture: Capture a single URL to a PNG file
- check: Check URLs against the safety rules without capturing
- tiers: Show subscription tier limits
"""

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .api import capture_screenshot, check_url
from .capture.browser_capture import ScreenshotCapturer, pyppeteer_session_factory
from .capture.errors import CaptureFailure, classify_failure
from .config import get_settings
from .safety.url_validator import UrlValidationError
from .tiers import TIER_LIMITS

console = Console()


@click.group()
def main():
    """pagesnap - Capture web page screenshots safely."""


@main.command()
@click.option('--host', help='Interface to bind (default: from settings)')
@click.option('--port', type=int, help='Port to listen on (default: from settings)')
@click.option('--reload', is_flag=True, help='Reload on code changes (development)')
def serve(host: str | None, port: int | None, reload: bool):
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold]pagesnap API[/] listening on [cyan]http://{host}:{port}[/]")
    uvicorn.run(
        "pagesnap.server.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@main.command()
@click.argument('url')
@click.option('-o', '--output', type=click.Path(path_type=Path), help='Output PNG path (default: screenshot.png)')
@click.option('--width', help='Viewport width (200-3000, default 1366)')
@click.option('--height', help='Viewport height (200-3000, default 768)')
@click.option('--full-page', is_flag=True, help='Capture the full scrollable page')
@click.option('--timeout', type=float, help='Navigation and capture deadline in seconds')
def capture(url: str, output: Path | None, width: str | None, height: str | None,
            full_page: bool, timeout: float | None):
    """Capture a screenshot of URL."""
    if output is None:
        output = Path('screenshot.png')

    settings = get_settings()
    capturer = ScreenshotCapturer(
        session_factory=pyppeteer_session_factory(executable_path=settings.chromium_executable),
        navigation_timeout=settings.navigation_timeout,
        capture_timeout=settings.capture_timeout,
    )

    console.print(f"[bold]Capturing:[/] {escape(url)}")

    try:
        result = asyncio.run(capture_screenshot(
            url,
            width=width,
            height=height,
            full_page=full_page,
            timeout=timeout,
            capturer=capturer,
        ))
    except UrlValidationError as e:
        console.print(f"[red]✗ Rejected ({e.code}):[/] {escape(e.message)}")
        raise click.Abort()
    except CaptureFailure as e:
        error = classify_failure(e)
        console.print(f"[red]✗ Capture failed ({error.code}):[/] {escape(error.details)}")
        raise click.Abort()

    output.write_bytes(result.image)

    console.print(f"[bold green]✓ Screenshot saved:[/] {escape(str(output))}")
    console.print(f"  Viewport: {result.width}x{result.height}{' (full page)' if result.full_page else ''}")
    console.print(f"  Size: {len(result.image) / 1024:.1f} KB")
    console.print(f"  Time: {result.duration_ms}ms")


@main.command()
@click.argument('urls', nargs=-1, required=True)
def check(urls: tuple[str, ...]):
    """Check URLs against the safety rules without capturing them."""
    table = Table(title="URL safety check")
    table.add_column("URL")
    table.add_column("Result")
    table.add_column("Code", no_wrap=True)
    table.add_column("Normalized / reason")

    rejected = 0
    for url in urls:
        result = check_url(url)
        if result.is_valid:
            table.add_row(escape(url), "[green]accepted[/]", "", escape(result.href))
        else:
            rejected += 1
            table.add_row(escape(url), "[red]rejected[/]", result.code, escape(result.message))

    console.print(table)

    if rejected:
        raise click.Abort()


@main.command()
def tiers():
    """Show subscription tier limits."""
    table = Table(title="Subscription tiers")
    table.add_column("Tier", style="cyan")
    table.add_column("Requests / month", justify="right")
    table.add_column("Max width", justify="right")
    table.add_column("Max height", justify="right")

    for name, limits in TIER_LIMITS.items():
        table.add_row(
            name,
            f"{limits.requests_per_month:,}",
            str(limits.max_viewport_width),
            str(limits.max_viewport_height),
        )

    console.print(table)


if __name__ == '__main__':
    main()
