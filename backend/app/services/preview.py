"""
Resume preview renderer.

Renders a stored resume into a printable HTML page with one of four Jinja2
templates. The print stylesheet pins output to a single US-letter page so the
browser print dialog produces the PDF.
"""

from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.models.resume import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_TEMPLATE,
    PERSONAL_INFO_FIELDS,
    TEMPLATE_CHOICES,
)
from app.schemas.resume import HEX_COLOR_PATTERN, coerce_skills

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def resolve_template(template: Optional[str]) -> str:
    """Map a stored template id to a template name, defaulting to classic."""
    if template in TEMPLATE_CHOICES:
        return template
    return DEFAULT_TEMPLATE


def _entries(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def _skills(value: Any) -> list[str]:
    try:
        return coerce_skills(value)
    except ValueError:
        return []


def normalize_for_render(data: dict) -> dict:
    """
    Shape stored resume data for the templates.

    Stored content may come straight from the AI extractor, so any section can
    be the wrong type. Wrong-typed sections render as empty.
    """
    info = data.get("personal_info")
    info = info if isinstance(info, dict) else {}
    summary = data.get("professional_summary")
    return {
        "title": data.get("title") or "",
        "professional_summary": summary if isinstance(summary, str) else "",
        "skills": _skills(data.get("skills")),
        "personal_info": {field: info.get(field) or "" for field in PERSONAL_INFO_FIELDS},
        "experience": _entries(data.get("experience")),
        "projects": _entries(data.get("projects")),
        "education": _entries(data.get("education")),
    }


def render_resume(
    data: dict,
    template: Optional[str] = None,
    accent_color: Optional[str] = None,
) -> str:
    """
    Render a resume to a full HTML page.

    Args:
        data: Resume document (as returned by Resume.to_dict())
        template: Template id; falls back to data["template"], then classic
        accent_color: Hex color; falls back to data["accent_color"], then the default
    """
    template_name = resolve_template(template or data.get("template"))
    color = accent_color or data.get("accent_color") or DEFAULT_ACCENT_COLOR
    if not isinstance(color, str) or not HEX_COLOR_PATTERN.match(color):
        color = DEFAULT_ACCENT_COLOR

    body = env.get_template(f"{template_name}.html").render(
        r=normalize_for_render(data),
        accent_color=color,
    )
    return env.get_template("page.html").render(
        title=data.get("title") or "Resume",
        body=body,
        template_name=template_name,
    )
