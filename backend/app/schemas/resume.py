"""
Resume document schemas.

Validates resume content coming from users (the update endpoint and the
in-memory editor). AI-extracted documents bypass these on purpose and are
stored as returned by the model.
"""

import re
from typing import Any, Optional, get_args

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from app.models.resume import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_TEMPLATE,
    DEFAULT_TITLE,
    TEMPLATE_CHOICES,
)

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def coerce_skills(value: Any) -> list[str]:
    """
    Normalize skills to a list of strings.

    Legacy free-text skills ("Python, SQL\\nDocker") are split on commas and
    newlines. Blank items are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = re.split(r"[,\n]", value)
    elif isinstance(value, (list, tuple)):
        items = [item for item in value if isinstance(item, (str, int, float))]
    else:
        raise ValueError("skills must be a list of strings or comma separated text")
    return [str(item).strip() for item in items if str(item).strip()]


def _allows_none(annotation: Any) -> bool:
    return type(None) in get_args(annotation)


class _NullAsDefault(BaseModel):
    """Read null as the field default unless the field is Optional."""

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, v, info: ValidationInfo):
        if v is None:
            field = cls.model_fields[info.field_name]
            if not _allows_none(field.annotation):
                return field.get_default(call_default_factory=True)
        return v


# ============== Section Entries ==============


class PersonalInfo(_NullAsDefault):
    model_config = ConfigDict(extra="ignore")

    image: str = ""
    full_name: str = ""
    profession: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""


class ExperienceEntry(_NullAsDefault):
    model_config = ConfigDict(extra="ignore")

    company: str = ""
    position: str = ""
    start_date: str = ""  # YYYY-MM
    end_date: Optional[str] = ""  # YYYY-MM, null while is_current
    description: str = ""
    is_current: bool = False


class ProjectEntry(_NullAsDefault):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    type: str = ""
    description: str = ""


class EducationEntry(_NullAsDefault):
    model_config = ConfigDict(extra="ignore")

    institution: str = ""
    degree: str = ""
    field: str = ""
    graduation_date: str = ""  # YYYY-MM
    gpa: str = ""


SECTION_ENTRY_MODELS: dict[str, type[BaseModel]] = {
    "experience": ExperienceEntry,
    "projects": ProjectEntry,
    "education": EducationEntry,
}


# ============== Documents ==============


class _ResumeFieldValidators(BaseModel):
    """Validators shared by the full document and the partial update."""

    @field_validator("template", check_fields=False)
    @classmethod
    def validate_template(cls, v):
        if v is not None and v not in TEMPLATE_CHOICES:
            raise ValueError(f"template must be one of {', '.join(TEMPLATE_CHOICES)}")
        return v

    @field_validator("accent_color", check_fields=False)
    @classmethod
    def validate_accent_color(cls, v):
        if v is not None and not HEX_COLOR_PATTERN.match(v):
            raise ValueError("accent_color must be a hex color such as #3b82f6")
        return v

    @field_validator("skills", mode="before", check_fields=False)
    @classmethod
    def validate_skills(cls, v):
        if v is None:
            return v
        return coerce_skills(v)

    @field_validator("title", check_fields=False)
    @classmethod
    def validate_title(cls, v):
        if v is None:
            return v
        return v.strip() or DEFAULT_TITLE


class ResumeDocument(_ResumeFieldValidators, _NullAsDefault):
    """A complete resume as held by the editor."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    title: str = DEFAULT_TITLE
    public: bool = False
    template: str = DEFAULT_TEMPLATE
    accent_color: str = DEFAULT_ACCENT_COLOR
    professional_summary: str = ""
    skills: list[str] = []
    personal_info: PersonalInfo = PersonalInfo()
    experience: list[ExperienceEntry] = []
    projects: list[ProjectEntry] = []
    education: list[EducationEntry] = []


class ResumeUpdate(_ResumeFieldValidators):
    """
    A partial resume sent to the update endpoint.

    Only fields present in the payload are written; each one replaces the
    stored value whole. Identity fields (id, user_id) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    public: Optional[bool] = None
    template: Optional[str] = None
    accent_color: Optional[str] = None
    professional_summary: Optional[str] = None
    skills: Optional[list[str]] = None
    personal_info: Optional[PersonalInfo] = None
    experience: Optional[list[ExperienceEntry]] = None
    projects: Optional[list[ProjectEntry]] = None
    education: Optional[list[EducationEntry]] = None

    def to_fields(self) -> dict[str, Any]:
        """Return the set fields as plain JSON-ready values."""
        fields = self.model_dump(exclude_unset=True)
        # null for a non-nullable column means "leave it alone"
        return {key: value for key, value in fields.items() if value is not None}


class ResumeCreate(BaseModel):
    """Schema for resume creation."""

    title: Optional[str] = None
