"""Page renderer — ResumeData to HTML via Jinja2 templates.

``build_page_context`` runs the normalizer and the section visibility
filter and hands the templates only what should appear: a section value of
``None`` means "do not render this section at all".

The templates mark the elements the PDF export needs to find with data
attributes (``data-resume-container``, ``data-personal-header``,
``data-export-hide``, ``data-pdf-cta``); see
``resume_site.export.capture.PRINT_LAYOUT_SCRIPT``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from resume_site.models import (
    ProjectRecord,
    ResumeData,
    WorkAchievementRecord,
    WorkSummaryRecord,
)
from resume_site.transform import (
    achievements_for,
    group_skills,
    group_tools,
    military_service_visible,
    section_visible,
    show_pdf_link_section,
    transform_contact_info,
    visible,
)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent / "static"

STYLESHEET_URL = "/static/resume.css"
STATIC_EXPORT_STYLESHEET_URL = "static/resume.css"
PDF_ENDPOINT = "/api/generate-pdf"

DEFAULT_TITLE = "Résumé"
DEFAULT_DESCRIPTION = "Developer résumé"

# Project-shaped collections in page order, with their section headings.
PROJECT_SECTIONS: tuple[tuple[str, str], ...] = (
    ("projects", "Projects."),
    ("portfolio", "Portfolio."),
    ("awards", "Awards."),
    ("activities", "Activities."),
    ("other_experience", "Other Experience."),
)

_BULLET_PREFIXES = ("-", "*", "•")


def bullets(text: str | None) -> Markup:
    """Render multi-line text: bullet lines become a list, others paragraphs.

    Consecutive bullet lines share one ``<ul>``.  All text is escaped.
    """
    if not text:
        return Markup("")
    parts: list[str] = []
    items: list[str] = []

    def _flush() -> None:
        if items:
            parts.append("<ul class=\"bullet-list\">" + "".join(items) + "</ul>")
            items.clear()

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            _flush()
            continue
        if line.startswith(_BULLET_PREFIXES):
            items.append(f"<li>{escape(line[1:].strip())}</li>")
        else:
            _flush()
            parts.append(f"<p>{escape(line)}</p>")
    _flush()
    return Markup("".join(parts))


# Reusable Jinja environment
jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
jinja_env.filters["bullets"] = bullets


@dataclass
class WorkEntry:
    """One company in the work experience section with its achievements."""

    summary: WorkSummaryRecord
    achievements: list[WorkAchievementRecord] = field(default_factory=list)


def page_metadata(data: ResumeData) -> tuple[str, str]:
    """Return the document (title, description), with generic fallbacks."""
    name = data.personal_info.name.strip()
    if not name:
        return DEFAULT_TITLE, DEFAULT_DESCRIPTION
    position = data.personal_info.position.strip()
    description = f"{position} {name} résumé" if position else f"{name} résumé"
    return f"{name} résumé", description


def build_page_context(
    data: ResumeData,
    *,
    static_export: bool = False,
    pdf_url: str | None = None,
) -> dict[str, Any]:
    """Compute everything the résumé template renders.

    Each section entry is ``None`` when the section is not eligible,
    otherwise it holds only the visible records in original order.
    """
    title, description = page_metadata(data)

    work_experience: list[WorkEntry] | None = None
    if section_visible(data.work_summary, data.work_achievements):
        work_experience = [
            WorkEntry(summary=s, achievements=achievements_for(s.company, data.work_achievements))
            for s in visible(data.work_summary)
        ]

    project_sections: list[tuple[str, str, list[ProjectRecord]]] = []
    for key, heading in PROJECT_SECTIONS:
        records: list[ProjectRecord] = getattr(data, key)
        if section_visible(records):
            project_sections.append((key, heading, visible(records)))

    def _section(records: list) -> list | None:
        return visible(records) if section_visible(records) else None

    return {
        "title": title,
        "description": description,
        "personal": data.personal_info,
        "contact": transform_contact_info(data.personal_info),
        "static_export": static_export,
        "show_download_button": not static_export,
        "pdf_endpoint": PDF_ENDPOINT,
        "pdf_url": pdf_url,
        "show_pdf_link": show_pdf_link_section(static_export, pdf_url),
        "stylesheet_url": STATIC_EXPORT_STYLESHEET_URL if static_export else STYLESHEET_URL,
        "skills": group_skills(data.skills) if section_visible(data.skills) else None,
        "core_competencies": _section(data.core_competencies),
        "work_experience": work_experience,
        "project_sections": project_sections,
        "values": _section(data.values),
        "other_tools": group_tools(data.other_tools) if section_visible(data.other_tools) else None,
        "education": _section(data.education),
        "certifications": _section(data.certifications),
        "military_service": (
            data.military_service if military_service_visible(data.military_service) else None
        ),
    }


def render_resume_page(
    data: ResumeData,
    *,
    static_export: bool = False,
    pdf_url: str | None = None,
) -> str:
    """Render the full résumé page to an HTML string."""
    context = build_page_context(data, static_export=static_export, pdf_url=pdf_url)
    return jinja_env.get_template("resume.html").render(**context)


def render_error_page(message: str, *, static_export: bool = False) -> str:
    """Render the fallback page shown when content could not be fetched."""
    return jinja_env.get_template("error.html").render(
        title=DEFAULT_TITLE,
        description=DEFAULT_DESCRIPTION,
        message=message,
        stylesheet_url=STATIC_EXPORT_STYLESHEET_URL if static_export else STYLESHEET_URL,
    )
