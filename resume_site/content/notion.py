"""Notion-backed content source.

Each résumé collection lives in its own Notion database.  Databases are
queried concurrently, rows are flattened to ``{snake_case_property: value}``
dicts, and the result is validated into ResumeData.

Property conversion
-------------------
title, rich_text       -> concatenated plain text
select, status         -> option name ("" when unset)
multi_select           -> list of option names
url, email, phone_number -> raw value
number, checkbox       -> raw value, turned into text by page_to_row
date                   -> "start" or "start ~ end"
files                  -> URL of the first file
anything else          -> dropped
"""

from __future__ import annotations

import logging
import re
from typing import Any

import anyio
import httpx

from resume_site import config
from resume_site.content.source import ContentFetchError, build_resume_data
from resume_site.models import COLLECTION_TYPES, SINGLETON_COLLECTIONS, ResumeData

logger = logging.getLogger("resume.content.notion")

NOTION_API_URL = "https://api.notion.com"
NOTION_VERSION = "2022-06-28"
REQUEST_TIMEOUT_SECONDS = 15.0
PAGE_SIZE = 100

_NON_ALNUM = re.compile(r"[^0-9a-z]+")


def property_key(name: str) -> str:
    """Normalise a Notion property name to the record field name.

    >>> property_key("Core Competency")
    'core_competency'
    """
    return _NON_ALNUM.sub("_", name.strip().lower()).strip("_")


def _plain_text(fragments: list[dict[str, Any]]) -> str:
    return "".join(f.get("plain_text", "") for f in fragments)


def property_value(prop: dict[str, Any]) -> Any:
    """Convert one Notion property object to a plain Python value."""
    kind = prop.get("type")
    value = prop.get(kind) if kind else None

    if kind in ("title", "rich_text"):
        return _plain_text(value or [])
    if kind in ("select", "status"):
        return value.get("name", "") if value else ""
    if kind == "multi_select":
        return [option.get("name", "") for option in value or []]
    if kind in ("url", "email", "phone_number", "number", "checkbox"):
        return value
    if kind == "date":
        if not value:
            return ""
        start, end = value.get("start") or "", value.get("end")
        return f"{start} ~ {end}" if end else start
    if kind == "files":
        for item in value or []:
            holder = item.get(item.get("type", ""), {})
            if holder.get("url"):
                return holder["url"]
        return ""
    return None


def _scalar_text(value: bool | int | float) -> str:
    if isinstance(value, bool):
        return "Yes" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def page_to_row(page: dict[str, Any]) -> dict[str, Any]:
    """Flatten a Notion page's properties to a record dict.

    Record fields are text, so numbers and checkboxes become strings.  The
    ``show`` flag keeps its checkbox boolean.
    """
    row: dict[str, Any] = {}
    for name, prop in (page.get("properties") or {}).items():
        value = property_value(prop)
        if value is None:
            continue
        key = property_key(name)
        if key != "show" and isinstance(value, (bool, int, float)):
            value = _scalar_text(value)
        row[key] = value
    return row


class NotionContentSource:
    """Fetches ResumeData from a set of Notion databases.

    ``database_ids`` maps collection keys (see ``COLLECTION_TYPES``) to
    Notion database ids.  Collections with no configured database come back
    empty; ``personal_info`` is mandatory.
    """

    def __init__(
        self,
        api_key: str,
        database_ids: dict[str, str],
        *,
        base_url: str = NOTION_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.database_ids = database_ids
        self.base_url = base_url
        self._transport = transport

    @classmethod
    def from_env(cls) -> "NotionContentSource":
        """Build a source from NOTION_API_KEY and NOTION_<COLLECTION>_DB."""
        api_key = config.get_notion_api_key() or ""
        database_ids = {
            key: db_id
            for key in COLLECTION_TYPES
            if (db_id := config.get_notion_database_id(key))
        }
        return cls(api_key, database_ids)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Notion-Version": NOTION_VERSION,
                "Content-Type": "application/json",
            },
            timeout=REQUEST_TIMEOUT_SECONDS,
            transport=self._transport,
        )

    async def query_database(
        self, client: httpx.AsyncClient, database_id: str
    ) -> list[dict[str, Any]]:
        """Return every row of a database, following pagination cursors."""
        rows: list[dict[str, Any]] = []
        body: dict[str, Any] = {
            "page_size": PAGE_SIZE,
            "sorts": [{"timestamp": "created_time", "direction": "ascending"}],
        }
        while True:
            resp = await client.post(f"/v1/databases/{database_id}/query", json=body)
            resp.raise_for_status()
            payload = resp.json()
            if not isinstance(payload, dict) or not isinstance(payload.get("results", []), list):
                raise TypeError(f"expected a JSON object with a results list, got {type(payload).__name__}")
            rows.extend(page_to_row(page) for page in payload.get("results", []))
            if not payload.get("has_more") or not payload.get("next_cursor"):
                return rows
            body["start_cursor"] = payload["next_cursor"]

    async def fetch(self) -> ResumeData:
        if not self.api_key:
            raise ContentFetchError("NOTION_API_KEY is not set")
        if "personal_info" not in self.database_ids:
            raise ContentFetchError("NOTION_PERSONAL_INFO_DB is not set")

        collected: dict[str, list[dict[str, Any]]] = {}
        # Failures are collected rather than raised inside the task group so
        # the caller sees a plain ContentFetchError, not an ExceptionGroup.
        failures: list[tuple[str, Exception]] = []

        async def _load(client: httpx.AsyncClient, key: str, database_id: str) -> None:
            try:
                collected[key] = await self.query_database(client, database_id)
            except (httpx.HTTPError, ValueError, TypeError, AttributeError, KeyError) as exc:
                failures.append((key, exc))
                return
            logger.debug("Fetched %d row(s) for %s", len(collected[key]), key)

        async with self._client() as client:
            async with anyio.create_task_group() as tg:
                for key, database_id in self.database_ids.items():
                    tg.start_soon(_load, client, key, database_id)

        if failures:
            key, exc = failures[0]
            if isinstance(exc, httpx.HTTPStatusError):
                raise ContentFetchError(
                    f"Notion API returned {exc.response.status_code} while fetching {key}"
                ) from exc
            if isinstance(exc, httpx.HTTPError):
                raise ContentFetchError(f"Notion request failed while fetching {key}: {exc}") from exc
            raise ContentFetchError(f"Notion returned a malformed response for {key}: {exc}") from exc

        bundle: dict[str, Any] = {}
        for key, rows in collected.items():
            if key in SINGLETON_COLLECTIONS:
                if rows:
                    bundle[key] = rows[0]
            else:
                bundle[key] = rows
        return build_resume_data(bundle)
