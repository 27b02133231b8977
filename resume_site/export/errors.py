"""Export pipeline error kinds.

All of them derive from ExportError so the PDF route can treat the whole
pipeline uniformly; none are retried.
"""

from __future__ import annotations


class ExportError(Exception):
    """Base class for failures while producing the PDF."""


class BrowserNotFound(ExportError):
    """No usable browser executable could be launched."""


class BrowserNotExecutable(BrowserNotFound):
    """Browser candidates exist on disk but none may be executed."""


class PageLoadError(ExportError):
    """Navigation to the résumé page failed or returned an HTTP error."""


class PageLoadTimeout(PageLoadError):
    """The page did not reach network idle within the load timeout."""


class CaptureError(ExportError):
    """Layout mutation or PDF encoding failed inside the loaded page."""
