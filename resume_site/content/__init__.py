"""Content sources -- where the résumé records come from.

Usage::

    from resume_site.content import ContentFetchError, create_content_source

    data = await create_content_source().fetch()
"""

from __future__ import annotations

from resume_site.content.source import (
    ContentFetchError,
    ContentSource,
    FileContentSource,
    create_content_source,
)

__all__ = [
    "ContentFetchError",
    "ContentSource",
    "FileContentSource",
    "create_content_source",
]
