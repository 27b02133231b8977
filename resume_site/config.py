"""Runtime configuration — environment variables read at call time.

Every getter reads ``os.environ`` when it is called rather than at import
time, so a test can ``monkeypatch.setenv`` and see the change immediately.

RESUME_ENV controls how much the export endpoint reveals on failure:
  production (default) — error label and message only
  development          — also the full traceback in ``details``
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

logger = logging.getLogger("resume")

# ---------------------------------------------------------------------------
# RESUME_ENV helpers
# ---------------------------------------------------------------------------

ResumeEnv = Literal["development", "production"]
_VALID_ENVS: frozenset[str] = frozenset({"development", "production"})

ContentSourceKind = Literal["notion", "file"]
_VALID_SOURCES: frozenset[str] = frozenset({"notion", "file"})

DEFAULT_PORT = 3000
DEFAULT_CONTENT_FILE = "content/resume.json"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def get_resume_env() -> ResumeEnv:
    """Return the current RESUME_ENV value, defaulting to ``'production'``.

    Unrecognised values fall back to ``'production'`` with a warning so a
    typo never starts leaking stack traces to clients.
    """
    raw = os.environ.get("RESUME_ENV", "production").strip().lower()
    if raw not in _VALID_ENVS:
        logger.warning(
            "Unknown RESUME_ENV=%r — falling back to 'production'. "
            "Valid values are: %s",
            raw,
            ", ".join(sorted(_VALID_ENVS)),
        )
        return "production"
    return raw  # type: ignore[return-value]


def is_development() -> bool:
    return get_resume_env() == "development"


def get_port() -> int:
    """Port the server listens on and the export pipeline loads from."""
    raw = os.environ.get("PORT", "").strip()
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid PORT=%r — using %d", raw, DEFAULT_PORT)
        return DEFAULT_PORT


def get_public_host() -> str | None:
    """Managed-deployment hostname (no scheme), or None when running locally."""
    host = os.environ.get("RESUME_PUBLIC_HOST", "").strip()
    return host or None


def is_static_export() -> bool:
    """True when the page is being built as a static site with no PDF endpoint."""
    return _flag("RESUME_STATIC_EXPORT")


def get_pdf_url() -> str | None:
    url = os.environ.get("RESUME_PDF_URL", "").strip()
    return url or None


def get_browser_path() -> str | None:
    """Explicit browser executable used instead of discovery on the fallback path."""
    path = os.environ.get("RESUME_BROWSER_PATH", "").strip()
    return path or None


# ---------------------------------------------------------------------------
# Content source selection
# ---------------------------------------------------------------------------


def get_content_source_kind() -> ContentSourceKind:
    raw = os.environ.get("RESUME_CONTENT_SOURCE", "notion").strip().lower()
    if raw not in _VALID_SOURCES:
        logger.warning(
            "Unknown RESUME_CONTENT_SOURCE=%r — falling back to 'notion'",
            raw,
        )
        return "notion"
    return raw  # type: ignore[return-value]


def get_content_file() -> Path:
    return Path(os.environ.get("RESUME_CONTENT_FILE", DEFAULT_CONTENT_FILE))


def get_notion_api_key() -> str | None:
    key = os.environ.get("NOTION_API_KEY", "").strip()
    return key or None


def get_notion_database_id(collection: str) -> str | None:
    """Database id for a collection, read from ``NOTION_<COLLECTION>_DB``.

    ``collection`` is the snake_case key used in ResumeData, e.g.
    ``work_summary`` reads ``NOTION_WORK_SUMMARY_DB``.
    """
    value = os.environ.get(f"NOTION_{collection.upper()}_DB", "").strip()
    return value or None
