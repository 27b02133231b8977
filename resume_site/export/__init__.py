"""PDF export pipeline -- browser acquisition, page capture, error kinds.

Usage::

    from resume_site.export import export_resume_pdf, ExportError

    result = await export_resume_pdf()      # PdfExportResult
"""

from __future__ import annotations

from resume_site.export.capture import export_resume_pdf, target_url
from resume_site.export.errors import (
    BrowserNotExecutable,
    BrowserNotFound,
    CaptureError,
    ExportError,
    PageLoadError,
    PageLoadTimeout,
)

__all__ = [
    "BrowserNotExecutable",
    "BrowserNotFound",
    "CaptureError",
    "ExportError",
    "PageLoadError",
    "PageLoadTimeout",
    "export_resume_pdf",
    "target_url",
]
