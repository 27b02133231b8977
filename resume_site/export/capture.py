"""Page loader, layout mutator and snapshot encoder.

``export_resume_pdf`` runs the whole export for one request:

    acquire browser -> new page -> load (network idle, 30 s) ->
    apply print layout -> page.pdf(A4) -> close browser

The browser is scoped by ``acquire_browser`` so it is closed on every path,
including load timeouts and capture failures.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from resume_site import config
from resume_site.export.browser import acquire_browser
from resume_site.export.errors import CaptureError, PageLoadError, PageLoadTimeout
from resume_site.export.locator import ExecutableProbe
from resume_site.models import PdfExportResult

logger = logging.getLogger("resume.export")

LOAD_TIMEOUT_MS = 30_000
DEFAULT_VIEWPORT = {"width": 1920, "height": 1080}

PDF_OPTIONS: dict[str, Any] = {
    "format": "A4",
    "print_background": True,
    "margin": {"top": "2cm", "bottom": "2cm", "left": "1cm", "right": "1cm"},
    "display_header_footer": False,
    # Let the two-column mutation govern layout, not any CSS @page size.
    "prefer_css_page_size": False,
}

# Runs inside the loaded page.  Only touches elements carrying the data
# attributes the résumé templates emit; safe to run more than once.
PRINT_LAYOUT_SCRIPT = """
() => {
  document.body.classList.add('pdf-mode');

  const container = document.querySelector('[data-resume-container]');
  if (container) {
    container.classList.add('pdf-mobile-layout');
    container.style.columnCount = '2';
    container.style.columnGap = '3rem';
    container.style.columnFill = 'auto';
  }

  const header = document.querySelector('[data-personal-header]');
  if (header) {
    header.classList.add('personal-info-header');
  }

  document.querySelectorAll('[data-export-hide]').forEach((el) => {
    el.style.display = 'none';
  });

  const cta = document.querySelector('[data-pdf-cta]');
  if (cta) {
    cta.style.display = 'none';
  }
}
"""


def target_url() -> str:
    """URL of the résumé page the export captures."""
    host = config.get_public_host()
    if host:
        return f"https://{host}/"
    return f"http://localhost:{config.get_port()}/"


async def load_page(page: Any, url: str, timeout_ms: int = LOAD_TIMEOUT_MS) -> None:
    """Navigate and wait for network idle; no retry on timeout."""
    logger.info("Loading page: %s", url)
    try:
        response = await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
    except PlaywrightTimeoutError as exc:
        raise PageLoadTimeout(
            f"Page {url} did not reach network idle within {timeout_ms / 1000:.0f}s"
        ) from exc
    except PlaywrightError as exc:
        raise PageLoadError(f"Navigation to {url} failed: {exc.message}") from exc

    if response is not None and not response.ok:
        raise PageLoadError(f"Page {url} answered HTTP {response.status}")
    logger.info("Page loaded successfully")


async def apply_print_layout(page: Any) -> None:
    """Switch the loaded page to its two-column print layout."""
    try:
        await page.evaluate(PRINT_LAYOUT_SCRIPT)
    except PlaywrightError as exc:
        raise CaptureError(f"Print layout could not be applied: {exc.message}") from exc


async def capture_pdf(page: Any) -> PdfExportResult:
    """Encode the current page as an A4 PDF."""
    try:
        content = await page.pdf(**PDF_OPTIONS)
    except PlaywrightError as exc:
        raise CaptureError(f"PDF encoding failed: {exc.message}") from exc
    result = PdfExportResult(content=content)
    logger.info("PDF generated successfully, size: %d bytes", result.size)
    return result


async def export_resume_pdf(
    url: str | None = None,
    *,
    driver_factory: Callable[[], Any] = async_playwright,
    probe: ExecutableProbe | None = None,
    platform: str | None = None,
    env: Mapping[str, str] | None = None,
    timeout_ms: int = LOAD_TIMEOUT_MS,
) -> PdfExportResult:
    """Capture the résumé page at ``url`` (default: ``target_url()``) as PDF."""
    url = url or target_url()
    async with driver_factory() as driver:
        async with acquire_browser(driver, probe=probe, platform=platform, env=env) as launched:
            try:
                page = await launched.browser.new_page(viewport=DEFAULT_VIEWPORT)
            except PlaywrightError as exc:
                raise CaptureError(f"Could not open a page: {exc.message}") from exc
            await load_page(page, url, timeout_ms)
            await apply_print_layout(page)
            return await capture_pdf(page)
