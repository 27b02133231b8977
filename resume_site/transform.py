"""Record normalizer and section visibility filter.

Pure functions over the record models; no I/O.  Every function that hands
records to rendering filters them through ``visible()`` first so a record
whose ``show`` flag is not exactly ``"show"`` never reaches the page.
"""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from resume_site.models import (
    ContactInfo,
    Link,
    MilitaryServiceRecord,
    OtherToolRecord,
    PersonalInfo,
    ResumeRecord,
    SkillCategory,
    SkillEntry,
    SkillRecord,
    ToolCategory,
    ToolEntry,
    WorkAchievementRecord,
)

R = TypeVar("R", bound=ResumeRecord)

DEFAULT_TOOL_CATEGORY = "Other"
_STRIPPED_PREFIX = "https://"


# ---------------------------------------------------------------------------
# Section visibility
# ---------------------------------------------------------------------------


def visible(records: Iterable[R]) -> list[R]:
    """Return the visible records, preserving their original order."""
    return [r for r in records if r.visible]


def section_visible(*collections: Iterable[ResumeRecord]) -> bool:
    """True iff at least one record across all collections is visible.

    Composite sections pass more than one collection (work experience is
    summaries plus achievements); eligibility is the OR across them.
    """
    return any(r.visible for records in collections for r in records)


def military_service_visible(record: MilitaryServiceRecord | None) -> bool:
    """The military service section renders only for a non-blank title."""
    return record is not None and bool(record.title.strip())


def show_pdf_link_section(static_export: bool, pdf_url: str | None) -> bool:
    """The closing PDF call-to-action needs a static build and a PDF URL."""
    return static_export and bool(pdf_url)


def achievements_for(
    company: str, achievements: Sequence[WorkAchievementRecord]
) -> list[WorkAchievementRecord]:
    """Visible achievements that belong to ``company``, in original order."""
    return [a for a in visible(achievements) if a.company == company]


# ---------------------------------------------------------------------------
# Record normalizer
# ---------------------------------------------------------------------------


def group_skills(records: Sequence[SkillRecord]) -> list[SkillCategory]:
    """Group visible skill rows by title in first-seen order.

    A row without a title gets a synthetic ``no-title-<n>`` key (``n`` is its
    index among the visible rows) so untitled rows never merge.
    """
    groups: dict[str, SkillCategory] = {}
    for index, record in enumerate(visible(records)):
        key = record.title or f"no-title-{index}"
        group = groups.get(key)
        if group is None:
            group = groups[key] = SkillCategory(category=key)
        group.skills.append(SkillEntry(name=list(record.skills), summary=""))
    return list(groups.values())


def group_tools(records: Sequence[OtherToolRecord]) -> list[ToolCategory]:
    """Group visible tool rows by category, ``"Other"`` when none is set."""
    groups: dict[str, ToolCategory] = {}
    for record in visible(records):
        key = record.category or DEFAULT_TOOL_CATEGORY
        group = groups.get(key)
        if group is None:
            group = groups[key] = ToolCategory(category=key)
        group.tools.append(
            ToolEntry(title=record.title, description=record.description or "")
        )
    return list(groups.values())


def _display_link(url: str) -> Link:
    return Link(url=url, display=url.replace(_STRIPPED_PREFIX, "", 1))


def transform_contact_info(personal: PersonalInfo) -> ContactInfo:
    """Map raw personal-info fields to display-ready contact details."""
    return ContactInfo(
        email=personal.email,
        phone=personal.phone,
        blog=_display_link(personal.website) if personal.website else None,
        github=_display_link(personal.github) if personal.github else None,
    )
