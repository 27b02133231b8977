"""POST /api/generate-pdf — capture the résumé page as a PDF.

Every export failure is caught here and turned into a JSON 500:

    {"error": "PDF generation failed", "message": "...", "details": "..."}

``details`` (the traceback) is only included when RESUME_ENV=development.
OPTIONS answers CORS preflight with permissive headers.
"""

from __future__ import annotations

import logging
import traceback
from typing import Awaitable, Callable

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from resume_site import config
from resume_site.export import export_resume_pdf
from resume_site.models import PdfExportResult

logger = logging.getLogger("resume.routes.pdf")

router = APIRouter(prefix="/api", tags=["export"])

ERROR_LABEL = "PDF generation failed"
PDF_FILENAME = "resume.pdf"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

Exporter = Callable[[], Awaitable[PdfExportResult]]

# ---------------------------------------------------------------------------
# Dependency: exporter
# ---------------------------------------------------------------------------

_exporter: Exporter | None = None


def _get_exporter() -> Exporter:
    """FastAPI dependency returning the coroutine that produces the PDF."""
    return _exporter or export_resume_pdf


def set_exporter(exporter: Exporter | None) -> None:
    """Override the exporter (tests inject fakes; None restores the default)."""
    global _exporter  # noqa: PLW0603
    _exporter = exporter


def pdf_error_response(exc: BaseException) -> JSONResponse:
    """Structured 500 for a failed export; traceback only in development."""
    body: dict[str, str] = {
        "error": ERROR_LABEL,
        "message": str(exc) or type(exc).__name__,
    }
    if config.is_development():
        body["details"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=body)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/generate-pdf")
async def generate_pdf(exporter: Exporter = Depends(_get_exporter)) -> Response:
    """Render the résumé page in a headless browser and return it as a PDF."""
    logger.info("PDF generation started")
    try:
        result = await exporter()
    except Exception as exc:
        logger.exception("PDF generation failed")
        return pdf_error_response(exc)

    logger.info("PDF generation completed (%d bytes)", result.size)
    return Response(
        content=result.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{PDF_FILENAME}"'},
    )


@router.options("/generate-pdf")
async def generate_pdf_preflight() -> Response:
    """CORS preflight for the PDF endpoint."""
    return Response(status_code=200, headers=CORS_HEADERS)
