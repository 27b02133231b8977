"""GET / — the résumé page.

Fetches content from the active ContentSource and renders it.  A
ContentFetchError renders the fallback page (HTTP 503) instead of
propagating; the PDF export treats that status as a load failure.

Uses dependency injection for the ContentSource so that tests can swap in a
fixture-backed source.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from resume_site import config
from resume_site.content import ContentFetchError, ContentSource, create_content_source
from resume_site.render import render_error_page, render_resume_page

logger = logging.getLogger("resume.routes.page")

router = APIRouter(tags=["page"])

# ---------------------------------------------------------------------------
# Dependency: default content source
# ---------------------------------------------------------------------------

_default_source: ContentSource | None = None


def _get_content_source() -> ContentSource:
    """FastAPI dependency returning the active ContentSource.

    Created on first use by ``create_content_source()`` from the environment.
    Tests may call ``set_content_source()`` to inject a different source.
    """
    global _default_source  # noqa: PLW0603
    if _default_source is None:
        _default_source = create_content_source()
    return _default_source


def set_content_source(source: ContentSource | None) -> None:
    """Override the default content source (used by tests and the CLI)."""
    global _default_source  # noqa: PLW0603
    _default_source = source


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
async def resume_page(source: ContentSource = Depends(_get_content_source)) -> HTMLResponse:
    """Render the résumé, or the fallback page when content is unavailable."""
    static_export = config.is_static_export()
    try:
        data = await source.fetch()
    except ContentFetchError as exc:
        logger.error("Failed to fetch resume data: %s", exc)
        return HTMLResponse(
            render_error_page(str(exc), static_export=static_export),
            status_code=503,
        )

    html = render_resume_page(data, static_export=static_export, pdf_url=config.get_pdf_url())
    return HTMLResponse(html)
