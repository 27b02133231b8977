"""Pydantic models — shared contract between content sources, the
normalizer and the page renderer.

Content records:
  - Every record type inherits ResumeRecord and carries a ``show`` flag.
    Only the exact value ``"show"`` makes a record visible; anything else
    (including a missing flag) is coerced to ``"hide"``.
  - Records are frozen: one fetch produces one immutable ResumeData that
    lives for a single render.
  - ``None`` values coming from a content source are dropped before
    validation so the field defaults apply (empty string / empty list).

Derived shapes (SkillCategory, ToolCategory, ContactInfo) are built fresh
per render by ``resume_site.transform`` and never persisted.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Literal Types
# ---------------------------------------------------------------------------

ShowFlag = Literal["show", "hide"]


# ---------------------------------------------------------------------------
# Base record
# ---------------------------------------------------------------------------


class ResumeRecord(BaseModel):
    """Base for every content record: a ``show`` flag plus domain fields."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    show: ShowFlag = "hide"

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("show", mode="before")
    @classmethod
    def coerce_show(cls, v: object) -> str:
        """Anything other than the exact string ``"show"`` hides the record.

        A checked checkbox (``True``) also counts as ``"show"`` so a content
        database may model the flag either way.
        """
        if v is True:
            return "show"
        return "show" if v == "show" else "hide"

    @property
    def visible(self) -> bool:
        return self.show == "show"


def _split_tags(v: object) -> object:
    """Accept ``"a, b"`` as well as ``["a", "b"]`` for tag lists."""
    if isinstance(v, str):
        return [part.strip() for part in v.split(",") if part.strip()]
    return v


# ---------------------------------------------------------------------------
# Content records, one type per collection
# ---------------------------------------------------------------------------


class PersonalInfo(ResumeRecord):
    name: str = ""
    position: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    github: str = ""
    introduction: str = ""


class SkillRecord(ResumeRecord):
    # Empty title means "ungrouped": the row gets its own category.
    title: str = ""
    skills: list[str] = Field(default_factory=list)

    split_skills = field_validator("skills", mode="before")(_split_tags)


class CoreCompetencyRecord(ResumeRecord):
    title: str = ""
    description: str = ""


class WorkSummaryRecord(ResumeRecord):
    company: str = ""
    position: str = ""
    period: str = ""
    description: str = ""


class WorkAchievementRecord(ResumeRecord):
    company: str = ""
    title: str = ""
    details: str = ""


class ProjectRecord(ResumeRecord):
    """Shared shape for projects, portfolio, awards, activities and other experience."""

    title: str = ""
    description: str = ""
    period: str = ""
    skills: list[str] = Field(default_factory=list)
    details: str = ""
    remark: str = ""
    github: str = ""
    website: str = ""
    ios: str = ""
    android: str = ""
    post: str = ""

    split_skills = field_validator("skills", mode="before")(_split_tags)

    @property
    def links(self) -> list[tuple[str, str]]:
        """(label, url) pairs for the non-empty link fields, in display order."""
        labelled = [
            ("GitHub", self.github),
            ("Website", self.website),
            ("App Store", self.ios),
            ("Google Play", self.android),
            ("Post", self.post),
        ]
        return [(label, url) for label, url in labelled if url]


class ValueRecord(ResumeRecord):
    title: str = ""
    description: str = ""


class OtherToolRecord(ResumeRecord):
    category: str = ""
    title: str = ""
    description: str = ""


class EducationRecord(ResumeRecord):
    school: str = ""
    major: str = ""
    period: str = ""
    description: str = ""


class CertificationRecord(ResumeRecord):
    title: str = ""
    issuer: str = ""
    date: str = ""
    description: str = ""


class MilitaryServiceRecord(ResumeRecord):
    title: str = ""
    period: str = ""
    rank: str = ""
    description: str = ""


# ---------------------------------------------------------------------------
# ResumeData: the bundle returned by a content source
# ---------------------------------------------------------------------------


class ResumeData(BaseModel):
    """Named record collections fetched in one go from the content source."""

    model_config = ConfigDict(frozen=True)

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    skills: list[SkillRecord] = Field(default_factory=list)
    core_competencies: list[CoreCompetencyRecord] = Field(default_factory=list)
    work_summary: list[WorkSummaryRecord] = Field(default_factory=list)
    work_achievements: list[WorkAchievementRecord] = Field(default_factory=list)
    projects: list[ProjectRecord] = Field(default_factory=list)
    portfolio: list[ProjectRecord] = Field(default_factory=list)
    awards: list[ProjectRecord] = Field(default_factory=list)
    activities: list[ProjectRecord] = Field(default_factory=list)
    other_experience: list[ProjectRecord] = Field(default_factory=list)
    values: list[ValueRecord] = Field(default_factory=list)
    other_tools: list[OtherToolRecord] = Field(default_factory=list)
    education: list[EducationRecord] = Field(default_factory=list)
    certifications: list[CertificationRecord] = Field(default_factory=list)
    military_service: MilitaryServiceRecord | None = None


# Collection key -> record type, used by content sources to validate rows.
# Singleton collections (a single record rather than a list) are listed in
# SINGLETON_COLLECTIONS.
COLLECTION_TYPES: dict[str, type[ResumeRecord]] = {
    "personal_info": PersonalInfo,
    "skills": SkillRecord,
    "core_competencies": CoreCompetencyRecord,
    "work_summary": WorkSummaryRecord,
    "work_achievements": WorkAchievementRecord,
    "projects": ProjectRecord,
    "portfolio": ProjectRecord,
    "awards": ProjectRecord,
    "activities": ProjectRecord,
    "other_experience": ProjectRecord,
    "values": ValueRecord,
    "other_tools": OtherToolRecord,
    "education": EducationRecord,
    "certifications": CertificationRecord,
    "military_service": MilitaryServiceRecord,
}

SINGLETON_COLLECTIONS: frozenset[str] = frozenset({"personal_info", "military_service"})


# ---------------------------------------------------------------------------
# Derived display shapes
# ---------------------------------------------------------------------------


class SkillEntry(BaseModel):
    name: list[str]
    summary: str = ""


class SkillCategory(BaseModel):
    category: str
    skills: list[SkillEntry] = Field(default_factory=list)


class ToolEntry(BaseModel):
    title: str
    description: str = ""


class ToolCategory(BaseModel):
    category: str
    tools: list[ToolEntry] = Field(default_factory=list)


class Link(BaseModel):
    url: str
    display: str


class ContactInfo(BaseModel):
    """Display-ready contact details.

    ``blog`` and ``github`` are None when the source field is empty, and
    the template skips them.
    """

    email: str = ""
    phone: str = ""
    blog: Link | None = None
    github: Link | None = None


class PdfExportResult(BaseModel):
    """An encoded PDF document, alive only for one export request."""

    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)
