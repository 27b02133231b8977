"""Content source — Protocol + FileContentSource + factory.

A content source returns one ResumeData bundle per call.  The Notion-backed
implementation lives in ``resume_site.content.notion``; FileContentSource
reads the same bundle from a JSON file for local development and static
builds without network access.

Use ``create_content_source()`` to obtain the implementation selected by the
``RESUME_CONTENT_SOURCE`` environment variable.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import anyio
from pydantic import ValidationError

from resume_site import config
from resume_site.models import ResumeData

logger = logging.getLogger("resume.content")


class ContentFetchError(Exception):
    """The content source was unreachable or returned malformed data."""


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class ContentSource(Protocol):
    """Protocol defining the content source interface."""

    async def fetch(self) -> ResumeData: ...


def build_resume_data(bundle: dict[str, Any]) -> ResumeData:
    """Validate a raw collection bundle into ResumeData.

    Raises ContentFetchError when the bundle does not match the record
    shapes, so callers only ever deal with one failure type.
    """
    try:
        return ResumeData.model_validate(bundle)
    except ValidationError as exc:
        raise ContentFetchError(f"Malformed resume content: {exc}") from exc


# ---------------------------------------------------------------------------
# FileContentSource: JSON bundle on disk
# ---------------------------------------------------------------------------


class FileContentSource:
    """Reads the resume bundle from a JSON file keyed by collection name."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def fetch(self) -> ResumeData:
        try:
            raw = await anyio.Path(self.path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ContentFetchError(f"Cannot read content file {self.path}: {exc}") from exc
        try:
            bundle = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ContentFetchError(f"Content file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(bundle, dict):
            raise ContentFetchError(f"Content file {self.path} must hold a JSON object")
        logger.debug("Loaded resume content from %s", self.path)
        return build_resume_data(bundle)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def create_content_source() -> ContentSource:
    """Factory: return the ContentSource for the current RESUME_CONTENT_SOURCE.

    - ``notion`` → :class:`~resume_site.content.notion.NotionContentSource`
    - ``file``   → :class:`FileContentSource` reading ``RESUME_CONTENT_FILE``
    """
    kind = config.get_content_source_kind()
    if kind == "file":
        return FileContentSource(config.get_content_file())

    from resume_site.content.notion import NotionContentSource

    return NotionContentSource.from_env()
